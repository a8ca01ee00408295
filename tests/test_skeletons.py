"""Tests for class and method skeleton rendering."""

from src.generators.skeletons import class_skeleton, method_skeleton
from src.parsers.structure import ClassRecord, Language, MethodRecord


class TestClassSkeleton:
    """Tests for class_skeleton."""

    def test_php_uses_default_namespace(self) -> None:
        record = ClassRecord(name="Foo", doc_comment="/** Foo class */")
        assert class_skeleton(record, "YourPackage") == (
            "<?php\nnamespace YourPackage;\n\n"
            "/** Foo class */\nclass Foo {\n // ... \n}"
        )

    def test_php_prefers_declared_namespace(self) -> None:
        record = ClassRecord(name="Foo", namespace="App\\Models")
        assert "namespace App\\Models;" in class_skeleton(record, "YourPackage")

    def test_php_without_any_namespace(self) -> None:
        record = ClassRecord(name="Foo")
        assert class_skeleton(record) == "<?php\n\nclass Foo {\n // ... \n}"

    def test_method_bodies_not_included(self) -> None:
        record = ClassRecord(
            name="Foo",
            methods=(MethodRecord(name="bar", body="return 'secret';"),),
        )
        skeleton = class_skeleton(record)
        assert "secret" not in skeleton
        assert "bar" not in skeleton

    def test_python(self) -> None:
        record = ClassRecord(
            name="Config", doc_comment="Holds settings.", language=Language.PYTHON
        )
        assert class_skeleton(record) == (
            'class Config:\n    """Holds settings."""\n\n    ...'
        )

    def test_python_without_docstring(self) -> None:
        record = ClassRecord(name="Config", language=Language.PYTHON)
        assert class_skeleton(record) == "class Config:\n    ..."

    def test_javascript(self) -> None:
        record = ClassRecord(
            name="Widget", doc_comment="/** A widget. */", language=Language.JAVASCRIPT
        )
        assert class_skeleton(record) == (
            "/** A widget. */\nclass Widget {\n  // ...\n}"
        )


class TestMethodSkeleton:
    """Tests for method_skeleton."""

    def test_php(self) -> None:
        method = MethodRecord(name="bar", doc_comment="/** does bar */", body="x")
        assert method_skeleton(method, Language.PHP) == (
            "<?php\n/** does bar */\npublic function bar() {\n // ... \n}"
        )

    def test_php_body_excluded(self) -> None:
        method = MethodRecord(name="bar", body="return 1;")
        assert "return 1;" not in method_skeleton(method, Language.PHP)

    def test_python_multiline_docstring(self) -> None:
        method = MethodRecord(name="load", doc_comment="Load.\n\nReturns a dict.")
        assert method_skeleton(method, Language.PYTHON) == (
            'def load(self):\n    """Load.\n\n    Returns a dict."""\n\n    ...'
        )

    def test_typescript_without_doc(self) -> None:
        method = MethodRecord(name="norm")
        assert method_skeleton(method, Language.TYPESCRIPT) == (
            "norm() {\n  // ...\n}"
        )
