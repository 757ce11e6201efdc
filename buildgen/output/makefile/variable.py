"""
Makefile Variables

Variables of the different make flavors and the groups they are rendered in.
"""

from typing import List, TextIO


class Variable:
    """
    Makefile variable.

    Use the constructors below rather than instantiating directly:
    recursive (=), overridable (?=), simple (:=), append (+=) and
    multiline (define ... endef).
    """

    def __init__(self, name: str, operator: str, value: str):
        self.name = name
        self.operator = operator
        self.value = value
        self._export = ""

    def export(self) -> "Variable":
        self._export = "export "
        return self

    def push(self, line: str) -> "Variable":
        """Append a line, rendered as += for recursive variables."""
        self.value += "\n" + line
        return self

    def generate(self, stream: TextIO) -> None:
        if self.operator == "=" and "\n" in self.value:
            for i, line in enumerate(self.value.split("\n")):
                operator = self.operator if i == 0 else "+="
                stream.write(f"{self._export}{self.name} {operator} {line}\n")
        elif self.operator == "define":
            stream.write(f"{self._export}define {self.name}\n{self.value}\nendef\n")
        else:
            stream.write(f"{self._export}{self.name} {self.operator} {self.value}".strip() + "\n")


def recursive_variable(name: str, value: str) -> Variable:
    return Variable(name, "=", value)


def overridable_variable(name: str, value: str) -> Variable:
    return Variable(name, "?=", value)


def simple_variable(name: str, value: str) -> Variable:
    return Variable(name, ":=", value)


def append_variable(name: str, value: str) -> Variable:
    return Variable(name, "+=", value)


def multiline_variable(name: str, value: str) -> Variable:
    return Variable(name, "define", value)


class VariableGroup:
    """Variables rendered together under a comment heading."""

    def __init__(self, description: str):
        self.description = description
        self.variables: List[Variable] = []

    def variable(self, variable: Variable) -> "VariableGroup":
        self.variables.append(variable)
        return self

    def generate(self, stream: TextIO) -> None:
        stream.write(f"# {self.description}\n\n")

        for variable in self.variables:
            variable.generate(stream)

        stream.write("\n")
