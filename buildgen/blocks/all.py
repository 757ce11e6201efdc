"""
All and Help Blocks

`all` is the default Makefile target depending on every top-level block;
`help` lists described targets.
"""

from pydantic import Field

from ..config.loader import BlockConfig
from ..dag.node import BaseNode, all_of, gather_matching_input_names, implements, negate
from ..output.makefile import (
    VARIABLE_GROUP_HELP,
    MakefileCompiler,
    MakefileOutput,
    SkipAsMakefileDependency,
    multiline_variable,
)
from .meta import Meta

DEFAULT_MENU_HEADER = """# Getting Started

To build this project, you must have the following installed:

- git
- make
- docker (with buildx)
"""


class All(BaseNode):
    """Makefile `all` target."""

    def __init__(self, meta: Meta):
        super().__init__("all")
        self.meta = meta

    def compile_makefile(self, output: MakefileOutput) -> None:
        dependencies = gather_matching_input_names(
            self,
            all_of(implements(MakefileCompiler), negate(implements(SkipAsMakefileDependency))),
        )
        output.target("all").depends(*dependencies)


class MakeHelpConfig(BlockConfig):
    menu_header: str = Field(DEFAULT_MENU_HEADER, alias="menuHeader")


class MakeHelp(BaseNode):
    """Makefile `help` target printing the described targets."""
    Config = MakeHelpConfig

    def __init__(self, meta: Meta):
        super().__init__("help")
        self.meta = meta
        self.menu_header = DEFAULT_MENU_HEADER

    def skip_as_makefile_dependency(self) -> None:
        pass

    def compile_makefile(self, output: MakefileOutput) -> None:
        output.variable_group(VARIABLE_GROUP_HELP).variable(
            multiline_variable("HELP_MENU_HEADER", self.menu_header.strip()).export()
        )

        output.target("help") \
            .description("This help menu.") \
            .script(
                "@echo \"$$HELP_MENU_HEADER\"",
                "@grep -E '^[a-zA-Z%_-]+:.*?## .*$$' $(MAKEFILE_LIST) "
                "| awk 'BEGIN {FS = \":.*?## \"}; {printf \"\\033[36m%-30s\\033[0m %s\\n\", $$1, $$2}'",
            ) \
            .phony()
