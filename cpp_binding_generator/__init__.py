"""
C++ Declarations Generator - Generate native API headers from type metadata
"""

from .generator import CppBindingsGenerator
from .type_mapper import TypeMapper, RenderMode
from .code_generators import CodeGenerator
from .dependency_sorter import DependencySorter, sort_structs
from .guid import Guid, to_guid
from .writer import HeaderWriter
from .errors import (
    GenerationError,
    CyclicDependencyError,
    AttributeContractError,
    InvariantError,
)

__version__ = "0.1.0"

__all__ = [
    "CppBindingsGenerator",
    "TypeMapper",
    "RenderMode",
    "CodeGenerator",
    "DependencySorter",
    "sort_structs",
    "Guid",
    "to_guid",
    "HeaderWriter",
    "GenerationError",
    "CyclicDependencyError",
    "AttributeContractError",
    "InvariantError",
]
