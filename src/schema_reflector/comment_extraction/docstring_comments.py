"""Comment map extraction from class and attribute docstrings."""

from __future__ import annotations

import ast
import inspect
import logging
import textwrap
from types import ModuleType

from schema_reflector.type_inspection import qualified_name_of

_LOGGER = logging.getLogger("schema_reflector.comments")


def collect_docstring_comments(*targets: ModuleType | type) -> dict[str, str]:
    """Build a comment map from the docstrings of classes.

    A module contributes every class defined in it. Attribute docstrings are
    string literals placed directly after an annotated attribute:

        @dataclass
        class User:
            \"\"\"A registered user.\"\"\"

            name: str
            \"\"\"Display name.\"\"\"

    yields `{"<module>.User": "A registered user.", "<module>.User.name": "Display name."}`.
    """
    comments: dict[str, str] = {}
    for target in targets:
        classes = [target] if isinstance(target, type) else _module_classes(target)
        for cls in classes:
            comments.update(_class_comments(cls))
    return comments


def _module_classes(module: ModuleType) -> list[type]:
    return [
        value
        for value in vars(module).values()
        if isinstance(value, type) and value.__module__ == module.__name__
    ]


def _class_comments(cls: type) -> dict[str, str]:
    try:
        source = inspect.getsource(cls)
    except (OSError, TypeError):
        _LOGGER.debug("No source available for %s; skipping comments", cls)
        return {}

    class_node = ast.parse(textwrap.dedent(source)).body[0]
    if not isinstance(class_node, ast.ClassDef):
        return {}

    qualified_name = qualified_name_of(cls)
    comments: dict[str, str] = {}
    docstring = ast.get_docstring(class_node)
    if docstring:
        comments[qualified_name] = docstring

    for previous, node in zip(class_node.body, class_node.body[1:]):
        if not (isinstance(previous, ast.AnnAssign) and isinstance(previous.target, ast.Name)):
            continue
        if (
            isinstance(node, ast.Expr)
            and isinstance(node.value, ast.Constant)
            and isinstance(node.value.value, str)
        ):
            comments[f"{qualified_name}.{previous.target.id}"] = inspect.cleandoc(node.value.value)
    return comments
