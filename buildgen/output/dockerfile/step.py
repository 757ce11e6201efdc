"""
Dockerfile Steps

Instructions making up a Dockerfile stage. Steps render themselves to a
text stream; steps that reference other stages (COPY --from) report those
stage names so stages can be ordered.
"""

from typing import List, Optional, TextIO
import shlex


class Step:
    """Base class for all Dockerfile instructions."""

    def depends(self) -> List[str]:
        """Names of stages this step requires."""
        return []

    def generate(self, stream: TextIO) -> None:
        raise NotImplementedError


class Arg(Step):
    """ARG instruction."""

    def __init__(self, name: str, default: Optional[str] = None):
        self.name = name
        self.default = default

    def generate(self, stream: TextIO) -> None:
        if self.default is None:
            stream.write(f"ARG {self.name}\n")
        else:
            stream.write(f"ARG {self.name}={self.default}\n")


class Copy(Step):
    """COPY instruction, optionally from another stage."""

    def __init__(self, src: str, dst: str):
        self.src = src
        self.dst = dst
        self._from: Optional[str] = None
        self._chmod: Optional[str] = None
        self._excludes: List[str] = []

    def from_(self, stage: str) -> "Copy":
        self._from = stage
        return self

    def chmod(self, mode: int) -> "Copy":
        self._chmod = f"0{mode:o}"
        return self

    def exclude(self, *patterns: str) -> "Copy":
        self._excludes.extend(patterns)
        return self

    def depends(self) -> List[str]:
        return [self._from] if self._from else []

    def generate(self, stream: TextIO) -> None:
        flags = []
        for pattern in self._excludes:
            flags.append(f"--exclude={pattern}")
        if self._chmod:
            flags.append(f"--chmod={self._chmod}")
        if self._from:
            flags.append(f"--from={self._from}")

        prefix = " ".join(flags)
        if prefix:
            prefix += " "

        stream.write(f"COPY {prefix}{self.src} {self.dst}\n")


class Run(Step):
    """
    RUN instruction.

    Built either from a command and arguments (quoted for the shell) or
    from a verbatim script.
    """

    def __init__(self, command: str = "", *args: str, script: Optional[str] = None):
        self.command = command
        self.args = list(args)
        self.script = script
        self._env: List[str] = []
        self._mounts: List[str] = []

    def env(self, name: str, value: str) -> "Run":
        self._env.append(f"{name}={value}")
        return self

    def mount_cache(self, target: str, id_prefix: str = "", locked: bool = False) -> "Run":
        mount = f"type=cache,target={target},id={id_prefix}{target}"
        if locked:
            mount += ",sharing=locked"
        self._mounts.append(mount)
        return self

    def generate(self, stream: TextIO) -> None:
        parts = [f"--mount={mount}" for mount in self._mounts]
        parts.extend(self._env)

        if self.script is not None:
            parts.append(self.script)
        else:
            parts.append(" ".join([self.command] + [shlex.quote(arg) for arg in self.args]))

        stream.write("RUN " + " ".join(parts) + "\n")


def Script(script: str) -> Run:
    """RUN instruction printing the script verbatim."""
    return Run(script=script)


class WorkDir(Step):
    """WORKDIR instruction."""

    def __init__(self, path: str):
        self.path = path

    def generate(self, stream: TextIO) -> None:
        stream.write(f"WORKDIR {self.path}\n")


class Env(Step):
    """ENV instruction."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def generate(self, stream: TextIO) -> None:
        stream.write(f"ENV {self.name}={self.value}\n")


class Entrypoint(Step):
    """ENTRYPOINT instruction in exec form."""

    def __init__(self, command: str, *args: str):
        self.argv = [command] + list(args)

    def generate(self, stream: TextIO) -> None:
        quoted = ", ".join(f'"{arg}"' for arg in self.argv)
        stream.write(f"ENTRYPOINT [{quoted}]\n")
