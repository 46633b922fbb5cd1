"""
Main C++ declarations generator orchestration
"""

import itertools
from operator import attrgetter
from pathlib import Path

from .code_generators import CodeGenerator
from .dependency_sorter import sort_structs
from .errors import RemovedTypeError
from .metadata import TypeDef
from .type_classifier import Category, classify_field, get_category, is_synthetic_nested
from .type_mapper import RenderMode, TypeMapper
from .verify import check_header
from .writer import HeaderWriter


class CppBindingsGenerator:
    """Main orchestrator for generating C++ declarations from metadata types"""

    def __init__(self):
        self.type_mapper = TypeMapper()
        self.code_generator = CodeGenerator(self.type_mapper)

    def select_types(self, types: list[TypeDef]) -> dict[Category, list[TypeDef]]:
        """Classify the emittable types, dropping nested helpers and removed types"""
        selected = {category: [] for category in Category}
        for type_def in types:
            if is_synthetic_nested(type_def) or self.type_mapper.is_removed(type_def):
                continue
            selected[get_category(type_def)].append(type_def)
        return selected

    @staticmethod
    def _referenced_signatures(type_def: TypeDef):
        """Signatures a type's declarations name: emitted fields and public method signatures"""
        for field in type_def.fields:
            if get_category(type_def) == Category.STRUCT:
                struct_field = classify_field(field, type_def)
                if struct_field.is_skipped:
                    continue
                yield struct_field.signature
            else:
                yield field.signature
        for method in type_def.methods:
            if not method.is_public:
                continue
            for param in method.params:
                yield param.signature
            if method.return_type is not None:
                yield method.return_type

    def check_removed_references(self, selected: dict[Category, list[TypeDef]]):
        """Reject kept types that name a removed type, which the header would never declare"""
        for types in selected.values():
            for type_def in types:
                for signature in self._referenced_signatures(type_def):
                    target = signature.type_def
                    if target is None or is_synthetic_nested(target):
                        continue
                    if self.type_mapper.is_removed(target):
                        raise RemovedTypeError(
                            f"References removed type '{target.full_name}'", type_def.full_name
                        )

    @staticmethod
    def _by_namespace(types: list[TypeDef]) -> list[tuple[str, list[TypeDef]]]:
        """Group types by namespace: namespaces sorted, types in input order"""
        groups = {}
        for type_def in types:
            groups.setdefault(type_def.namespace, []).append(type_def)
        return sorted(groups.items())

    @staticmethod
    def _write_block(writer: HeaderWriter, items: list[str], scope):
        """Write items inside a scope, skipping the scope when nothing is generated"""
        items = [item for item in items if item]
        if not items:
            return
        with scope():
            writer.write_each(items)
        writer.write("\n")

    def _write_namespaces(self, writer: HeaderWriter, types: list[TypeDef], render):
        for namespace, group in self._by_namespace(types):
            mode = RenderMode.user(namespace)
            items = []
            for type_def in group:
                items.extend(render(type_def, mode))
            self._write_block(writer, items, lambda: writer.wrap_type_namespace(namespace))

    def write_header(self, writer: HeaderWriter, types: list[TypeDef]):
        """Write every section of the header in declaration order"""
        selected = self.select_types(types)
        self.check_removed_references(selected)
        enums = selected[Category.ENUM]
        delegates = selected[Category.DELEGATE]
        classes = selected[Category.CLASS]
        interfaces = selected[Category.INTERFACE]
        structs = sort_structs(selected[Category.STRUCT])
        generator = self.code_generator

        writer.write("#pragma once\n\n")

        forwards = structs + classes + [t for t in interfaces if generator.should_write_interface(t)]
        self._write_namespaces(writer, forwards, lambda t, mode: [generator.generate_forward(t)])

        self._write_namespaces(
            writer, enums, lambda t, mode: [generator.generate_enum(t, mode), generator.generate_enum_operators(t)]
        )
        self._write_namespaces(writer, delegates, lambda t, mode: [generator.generate_delegate(t, mode)])

        # Consecutive structs of one namespace share a block; order is fixed by dependencies
        for namespace, run in itertools.groupby(structs, key=attrgetter("namespace")):
            mode = RenderMode.user(namespace)
            items = [generator.generate_struct(t, mode) for t in run]
            self._write_block(writer, items, lambda: writer.wrap_type_namespace(namespace))

        impl_items = [generator.generate_guid(t) for t in interfaces + classes]
        for type_def in interfaces:
            impl_items.append(generator.generate_interface_abi(type_def))
            impl_items.append(generator.generate_consume(type_def))
        self._write_block(writer, impl_items, writer.wrap_impl_namespace)

        self._write_namespaces(writer, interfaces, lambda t, mode: [generator.generate_interface(t)])

        self._write_block(
            writer, [generator.generate_consume_definitions(t) for t in interfaces], writer.wrap_impl_namespace
        )

        self._write_block(writer, [generator.generate_class_abi(t) for t in classes], writer.wrap_extern_c)
        links = [generator.generate_class_links(t) for t in classes]
        if any(links):
            writer.write_each(links)
            writer.write("\n")

        self._write_namespaces(writer, classes, lambda t, mode: [generator.generate_class(t, mode)])

    def generate(self, types: list[TypeDef], output: str = None, verify: bool = False) -> str:
        """Generate the C++ header for a set of metadata types

        Args:
            types: Type definitions supplied by the metadata reader
            output: Optional output file path (prints to stdout if not specified)
            verify: Check the header with libclang before writing it
        """
        writer = HeaderWriter()
        self.write_header(writer, types)
        header = writer.getvalue()

        if verify:
            check_header(header)
            print("Verified generated header with libclang")

        if output:
            Path(output).parent.mkdir(parents=True, exist_ok=True)
            writer.save_as(output)
            print(f"Generated bindings: {output}")
        else:
            print(header)

        return header
