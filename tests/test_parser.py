# =============================================================================
# test_parser.py - Declarator Parser Tests
# =============================================================================
# Tests for the recursive descent parser: translations of complete
# declarations, pointer qualifiers, parameter lists, syntax errors,
# error formatting and the declarator tree.
# =============================================================================

import pytest
from kr_cdecl import explain, parse_declaration, parse_tree
from kr_cdecl.decl.ast import (
    ArrayNode,
    FunctionNode,
    GroupNode,
    NameNode,
    PointerNode,
    TreePrinter,
)
from kr_cdecl.decl.parser import DeclarationParser
from kr_cdecl.decl.errors import (
    CDeclError,
    InvalidCharacterError,
    MissingElementError,
    QualifierConflictError,
    QualifierError,
    StorageClassError,
    UnbalancedError,
    UnexpectedIdentifierError,
    UnexpectedTokenError,
)


# =============================================================================
# Translation Tests
# =============================================================================

class TestBasicDeclarations:
    """Simple declarations from K&R chapter 5."""

    @pytest.mark.parametrize("source,expected", [
        ("int x;", "x: int"),
        ("int x", "x: int"),
        ("  char   c ;", "c: char"),
        ("int *x;", "x: pointer to int"),
        ("char **argv;", "argv: pointer to pointer to char"),
        ("int a[5];", "a: array[5] of int"),
        ("int *x[3];", "x: array[3] of pointer to int"),
        ("int (*x)[3];", "x: pointer to array[3] of int"),
        ("int *f();", "f: function() returning pointer to int"),
        ("int (*f)();", "f: pointer to function() returning int"),
        ("int ((x));", "x: int"),
        ("char (*(*x())[])();",
         "x: function() returning pointer to array[] of pointer to function() returning char"),
        ("char (*(*x[3])())[5];",
         "x: array[3] of pointer to function() returning pointer to array[5] of char"),
    ])
    def test_translation(self, source, expected):
        assert parse_declaration(source) == expected

    def test_function_pointer_with_parameters(self):
        assert (
            parse_declaration("char *(*f)(int, char **);")
            == "f: pointer to function (int, pointer to pointer to char) returning pointer to char"
        )

    def test_signal(self):
        """The classic signal() declaration."""
        assert parse_declaration("void (*signal(int sig, void (*handler)(int)))(int);") == (
            "signal: function (sig: int, handler: pointer to function (int) returning void) "
            "returning pointer to function (int) returning void"
        )

    def test_abstract_pointer(self):
        """A declaration without a name is described without one."""
        assert parse_declaration("int *;") == "pointer to int"


class TestPointerQualifiers:

    @pytest.mark.parametrize("source,expected", [
        ("int * const x;", "x: const pointer to int"),
        ("const int *x;", "x: pointer to const int"),
        ("int * volatile * const x;", "x: const pointer to volatile pointer to int"),
        ("int * const const x;", "x: const pointer to int"),
        ("int * restrict p;", "p: restrict pointer to int"),
        ("int * restrict restrict p;", "p: restrict pointer to int"),
        ("int * restrict const p;", "p: const restrict pointer to int"),
        ("int * const * const p;", "p: const pointer to const pointer to int"),
    ])
    def test_translation(self, source, expected):
        assert parse_declaration(source) == expected

    def test_conflicting_pointer_qualifiers(self):
        with pytest.raises(
            QualifierConflictError,
            match="volatile incompatible with previous qualifier const",
        ):
            parse_declaration("int * const volatile x;")

    @pytest.mark.parametrize("source", [
        "int restrict x;",
        "restrict int *x;",
        "int * const restrict p;",
    ])
    def test_restrict_without_pointer(self, source):
        with pytest.raises(QualifierError, match="restrict qualifier applies to pointers only"):
            parse_declaration(source)


class TestParameters:

    @pytest.mark.parametrize("source,expected", [
        ("int f(void);", "f: function (void) returning int"),
        ("int f(int);", "f: function (int) returning int"),
        ("int f(int x, char *s);", "f: function (x: int, s: pointer to char) returning int"),
        ("int f(register int x);", "f: function (x: register int) returning int"),
        ("int f(const char *);", "f: function (pointer to const char) returning int"),
        ("int f(int *[3]);", "f: function (array[3] of pointer to int) returning int"),
        ("int f(int (*g)(char));",
         "f: function (g: pointer to function (char) returning int) returning int"),
        ("static int f(int);", "f: static function (int) returning int"),
    ])
    def test_translation(self, source, expected):
        assert parse_declaration(source) == expected

    def test_storage_class_without_name(self):
        with pytest.raises(StorageClassError, match="unexpected storage class"):
            parse_declaration("int f(static int);")

    @pytest.mark.parametrize("source", ["int f(int,);", "int f(int,,int);"])
    def test_empty_parameter(self, source):
        with pytest.raises(MissingElementError, match="expected type"):
            parse_declaration(source)

    def test_semicolon_in_list(self):
        with pytest.raises(UnexpectedTokenError, match="unexpected token ;"):
            parse_declaration("int f(int x; int y);")

    def test_unterminated_list(self):
        with pytest.raises(CDeclError, match="unexpected end of list"):
            parse_declaration("int f(int x")

    def test_list_ends_after_parameter_type(self):
        with pytest.raises(CDeclError, match="unexpected end of list"):
            parse_declaration("int f(int")

    def test_name_before_parameter_list(self):
        with pytest.raises(MissingElementError, match=r"expected identifier before \( token"):
            parse_declaration("int (int x);")

    def test_identifier_list_rejected(self):
        """Old-style identifier lists are not declarations."""
        with pytest.raises(UnexpectedIdentifierError, match="unexpected identifier x"):
            parse_declaration("int f(x);")


# =============================================================================
# Syntax Error Tests
# =============================================================================

class TestSyntaxErrors:

    @pytest.mark.parametrize("source,error,message", [
        ("", MissingElementError, "expected type"),
        ("int", MissingElementError, "missing object"),
        ("const int", MissingElementError, "missing object"),
        ("static unsigned long", MissingElementError, "missing object"),
        ("int;", MissingElementError, "missing object"),
        (";", MissingElementError, "missing object"),
        ("int ();", MissingElementError, "expected identifier"),
        ("int (*);", MissingElementError, r"expected identifier or type before \) token"),
        ("int x y;", UnexpectedIdentifierError, "unexpected identifier y"),
        ("int (x) y;", UnexpectedIdentifierError, "unexpected identifier y"),
        ("int f(int) x;", UnexpectedIdentifierError, "unexpected identifier x"),
        ("int x, y;", UnexpectedTokenError, "unexpected token ,"),
        ("int x;;", UnexpectedTokenError, "unexpected token ;"),
        ("int x; int", UnexpectedTokenError, "unexpected token int"),
        ("int x);", UnexpectedTokenError, r"unexpected token \)"),
        ("int x*;", UnexpectedTokenError, r"unexpected token \*"),
        ("int x];", UnexpectedTokenError, r"unexpected token \]"),
        ("int 3x;", UnexpectedTokenError, "unexpected token 3x"),
        ("int x const;", UnexpectedTokenError, "unexpected token const"),
        ("int x(*y);", UnexpectedTokenError, r"unexpected token \*"),
        ("int (x;", UnbalancedError, "unbalanced parentheses"),
        ("int (x;);", UnbalancedError, "unbalanced parentheses"),
        ("int f(", UnbalancedError, "unbalanced parentheses"),
        ("int x = 3;", InvalidCharacterError, "unexpected token ="),
        ("int my_var;", InvalidCharacterError, "unexpected token _"),
    ])
    def test_rejected(self, source, error, message):
        with pytest.raises(error, match=message):
            parse_declaration(source)


# =============================================================================
# Error Reporting Tests
# =============================================================================

class TestErrorReporting:

    def test_explain_success(self):
        assert explain("int x;") == "x: int"

    def test_explain_error(self):
        assert explain("int f()[3];") == "syntax error: cannot return array"

    def test_error_has_source_line(self):
        with pytest.raises(CDeclError) as exc_info:
            parse_declaration("int x y")
        assert exc_info.value.source_line == "int x y"
        assert exc_info.value.message == "unexpected identifier y"

    def test_formatted_error(self):
        """str() shows location, the line, a caret and the hint."""
        with pytest.raises(CDeclError) as exc_info:
            parse_declaration("int x y")
        lines = str(exc_info.value).splitlines()
        assert lines[0] == "<input>:1:7: syntax error: unexpected identifier y"
        assert lines[1] == "    int x y"
        assert lines[2] == " " * 10 + "^"
        assert lines[3].startswith("hint:")

    def test_error_location_uses_filename(self):
        with pytest.raises(CDeclError) as exc_info:
            parse_tree("int a[x];", "decls.h", 4)
        assert str(exc_info.value.location) == "decls.h:4:7"


class TestStateIsolation:
    """Each parse starts from fresh state."""

    def test_parse_after_error_inside_parameters(self):
        assert explain("int f(int, void);") == "syntax error: void must be the only parameter"
        assert explain("int x;") == "x: int"

    def test_pending_storage_class_does_not_leak(self):
        explain("static int;")
        assert explain("int x;") == "x: int"

    def test_nesting_does_not_leak(self):
        """A failed parse inside a parameter list leaves no open list behind."""
        explain("int f(int a[static]);")
        with pytest.raises(QualifierError):
            parse_declaration("int a[const 3];")

    def test_same_input_same_result(self):
        source = "char *(*f)(int, char **);"
        assert parse_declaration(source) == parse_declaration(source)

    def test_function_after_failed_parse(self):
        explain("static int f(register int a[static]);")
        assert explain("int f();") == "f: function() returning int"

    def test_parser_instances_are_independent(self):
        first = DeclarationParser("static int f(int x")
        second = DeclarationParser("char c;")
        with pytest.raises(CDeclError):
            first.parse()
        assert second.parse().describe() == "c: char"
        assert second.state.nesting == 0


# =============================================================================
# Tree Tests
# =============================================================================

class TestDeclarationTree:

    def test_tree_shape(self):
        """The tree follows the syntax, the pointer being outermost."""
        declaration = parse_tree("int *x[3];")
        pointer = declaration.declarator
        assert isinstance(pointer, PointerNode)
        assert isinstance(pointer.inner, ArrayNode)
        assert pointer.inner.inner == NameNode(identifier="x")

    def test_derivations_in_reading_order(self):
        declaration = parse_tree("int (*x)[3];")
        kinds = [type(node) for node in declaration.derivations()]
        assert kinds == [PointerNode, ArrayNode]
        assert isinstance(declaration.declarator.inner, GroupNode)

    def test_name(self):
        assert parse_tree("static char *s;").name.storage_class == "static"
        assert parse_tree("int *;").name is None

    def test_parameters(self):
        function = parse_tree("int f(char, long y);").declarator
        assert isinstance(function, FunctionNode)
        assert [p.describe() for p in function.parameters] == ["char", "y: long"]
        assert parse_tree("int g();").declarator.parameters is None

    def test_tree_printer(self):
        text = TreePrinter().print(parse_tree("int *x[3];"))
        assert text.splitlines() == [
            "Declaration: int",
            "  Pointer",
            "    Array[3]",
            "      Name: x",
        ]

    def test_tree_printer_parameters(self):
        text = TreePrinter().print(parse_tree("void f(int a[static 2]);"))
        assert "Function (1 parameters)" in text
        assert "Array[at least 2]" in text
        assert "Name: a" in text
