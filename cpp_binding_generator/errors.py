"""
Errors raised while generating C++ declarations from metadata
"""


class GenerationError(Exception):
    """A metadata contract violation that aborts the generation run"""

    def __init__(self, message: str, type_name: str | None = None):
        self.type_name = type_name
        if type_name:
            message = f"{message} (type '{type_name}')"
        super().__init__(message)


class CyclicDependencyError(GenerationError):
    """Structs contain each other by value"""


class AttributeContractError(GenerationError):
    """A required attribute is missing or malformed"""


class InvariantError(GenerationError):
    """Metadata has a shape the generator does not support"""


class RemovedTypeError(GenerationError):
    """A kept type refers to a type excluded by a removal pattern"""
