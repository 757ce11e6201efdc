import io

from buildgen.output import preamble
from buildgen.output.makefile import (
    MAKEFILE,
    VARIABLE_GROUP_COMMON,
    MakefileOutput,
    Target,
    append_variable,
    multiline_variable,
    overridable_variable,
    recursive_variable,
    simple_variable,
)


def _render(item):
    buf = io.StringIO()
    item.generate(buf)
    return buf.getvalue()


class TestVariables:
    def test_flavors(self):
        assert _render(simple_variable("A", "1")) == "A := 1\n"
        assert _render(overridable_variable("B", "2")) == "B ?= 2\n"
        assert _render(recursive_variable("C", "3")) == "C = 3\n"
        assert _render(append_variable("D", "4")) == "D += 4\n"

    def test_empty_value(self):
        assert _render(simple_variable("EMPTY", "")) == "EMPTY :=\n"

    def test_multi_line_recursive_appends(self):
        variable = recursive_variable("ARGS", "--one").push("--two")

        assert _render(variable) == "ARGS = --one\nARGS += --two\n"

    def test_exported_multiline(self):
        variable = multiline_variable("HEADER", "line 1\nline 2").export()

        assert _render(variable) == "export define HEADER\nline 1\nline 2\nendef\n"


class TestTargets:
    def test_full_target(self):
        target = Target("lint").depends("lint-a", "lint-b").description("Run linters.").phony()
        target.script("@echo one\n@echo two")

        assert _render(target) == (
            ".PHONY: lint\n"
            "lint: lint-a lint-b  ## Run linters.\n"
            "\t@echo one\n"
            "\t@echo two\n"
            "\n"
        )

    def test_bare_target(self):
        assert _render(Target("all")) == "all:\n\n"


class TestMakefileOutput:
    def test_all_target_comes_first(self):
        output = MakefileOutput()
        output.target("clean")
        output.target("all").depends("clean")
        output.target("lint")

        content = output.render()[MAKEFILE]

        assert content == preamble("# ") + "all: clean\n\nclean:\n\nlint:\n\n"

    def test_variable_groups_render_before_targets(self):
        output = MakefileOutput()
        output.variable_group(VARIABLE_GROUP_COMMON).variable(simple_variable("A", "1"))
        output.variable_group(VARIABLE_GROUP_COMMON).variable(simple_variable("B", "2"))
        output.target("all")

        content = output.render()[MAKEFILE]

        assert content == preamble("# ") + "# common variables\n\nA := 1\nB := 2\n\nall:\n\n"

    def test_duplicate_target_warns(self, caplog):
        output = MakefileOutput()
        output.target("lint")
        output.target("lint")

        assert "Duplicate Makefile target: lint" in caplog.text
        assert len(output.targets) == 2
