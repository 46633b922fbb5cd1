"""
Text sink for the generated header
"""

from contextlib import contextmanager
from pathlib import Path

from .constants import IMPL_NAMESPACE
from .errors import InvariantError
from .type_mapper import cpp_namespace


class HeaderWriter:
    """Append-only header text divided into nested scopes"""

    def __init__(self):
        self._parts = []
        self._scopes = []

    def write(self, text: str):
        self._parts.append(text)

    def write_each(self, items):
        """Write every non-empty generated item"""
        for item in items:
            if item:
                self.write(item)

    @contextmanager
    def _scope(self, name: str, opening: str, closing: str):
        self.write(opening)
        self._scopes.append(name)
        try:
            yield self
        finally:
            if not self._scopes or self._scopes[-1] != name:
                raise InvariantError(f"Scope '{name}' closed out of order")
            self._scopes.pop()
            self.write(closing)

    def wrap_impl_namespace(self):
        return self._scope(IMPL_NAMESPACE, f"namespace {IMPL_NAMESPACE}\n{{\n", "}\n")

    def wrap_type_namespace(self, namespace: str):
        name = cpp_namespace(namespace)
        return self._scope(name, f"namespace {name}\n{{\n", "}\n")

    def wrap_extern_c(self):
        return self._scope('extern "C"', 'extern "C"\n{\n', "}\n")

    @property
    def depth(self) -> int:
        return len(self._scopes)

    def getvalue(self) -> str:
        if self._scopes:
            raise InvariantError(f"Unclosed scopes: {', '.join(self._scopes)}")
        return "".join(self._parts)

    def save_as(self, path):
        Path(path).write_text(self.getvalue())
