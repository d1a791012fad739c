# =============================================================================
# test_types.py - Type Resolver Tests
# =============================================================================
# Tests for base type resolution: specifiers, qualifiers, storage classes
# and the specifier legality table.
# =============================================================================

import itertools

import pytest
from kr_cdecl.decl.lexer import Lexer, TokenType
from kr_cdecl.decl.parser import ParserState, parse_declaration
from kr_cdecl.decl.types import TypeDescriptor, check_specifiers, resolve_type
from kr_cdecl.decl.errors import (
    IncompatibleSpecifiersError,
    MissingElementError,
    QualifierConflictError,
    SpecifierError,
    StorageClassError,
)


SPECIFIERS = ["void", "char", "short", "int", "long", "float", "double", "signed", "unsigned"]

# Pairs that may share a type, written out independently of the module table
LEGAL = {
    ("char", "signed"), ("char", "unsigned"),
    ("short", "int"), ("short", "signed"), ("short", "unsigned"),
    ("int", "long"), ("int", "signed"), ("int", "unsigned"),
    ("long", "long"), ("long", "double"), ("long", "signed"), ("long", "unsigned"),
    ("float", "signed"), ("float", "unsigned"),
    ("double", "signed"), ("double", "unsigned"),
}


def is_legal(first: str, second: str) -> bool:
    return (first, second) in LEGAL or (second, first) in LEGAL


ALL_PAIRS = list(itertools.product(SPECIFIERS, repeat=2))


# =============================================================================
# Legality Table
# =============================================================================

class TestLegalityTable:
    """Every ordered pair of specifiers, in both orders."""

    @pytest.mark.parametrize("first,second", [p for p in ALL_PAIRS if is_legal(*p)])
    def test_legal_pair(self, first, second):
        assert parse_declaration(f"{first} {second} x;") == f"x: {first} {second}"

    @pytest.mark.parametrize("first,second", [p for p in ALL_PAIRS if not is_legal(*p)])
    def test_illegal_pair(self, first, second):
        with pytest.raises(
            IncompatibleSpecifiersError,
            match=f"specifier {second} incompatible with {first}",
        ):
            parse_declaration(f"{first} {second} x;")

    def test_void_signed_is_illegal(self):
        """void combines with nothing, signed included."""
        with pytest.raises(IncompatibleSpecifiersError):
            parse_declaration("void signed x;")
        with pytest.raises(IncompatibleSpecifiersError):
            parse_declaration("signed void x;")


# =============================================================================
# Specifier Counting
# =============================================================================

class TestSpecifierCount:

    def test_four_specifiers(self):
        assert parse_declaration("unsigned long long int x;") == "x: unsigned long long int"

    def test_order_is_kept(self):
        assert parse_declaration("long unsigned x;") == "x: long unsigned"

    def test_five_specifiers(self):
        with pytest.raises(SpecifierError, match="too many specifiers"):
            parse_declaration("unsigned long long int int x;")

    def test_long_long_double(self):
        with pytest.raises(SpecifierError, match="too many long specifiers"):
            parse_declaration("long long double x;")

    def test_long_long_long(self):
        with pytest.raises(SpecifierError, match="too many long specifiers"):
            parse_declaration("long long long x;")

    def test_long_double(self):
        assert parse_declaration("long double x;") == "x: long double"

    def test_check_specifiers_reports_later_word(self):
        """The error names the later specifier first."""
        with pytest.raises(IncompatibleSpecifiersError) as exc_info:
            check_specifiers(["short", "char"])
        assert exc_info.value.specifier == "char"
        assert exc_info.value.previous == "short"


# =============================================================================
# Qualifiers and Storage Classes
# =============================================================================

class TestQualifiers:

    def test_qualifier_before_type(self):
        assert parse_declaration("const int x;") == "x: const int"

    def test_qualifier_after_type(self):
        """The qualifier is always written first."""
        assert parse_declaration("int volatile x;") == "x: volatile int"

    def test_repeated_qualifier(self):
        assert parse_declaration("const const int x;") == "x: const int"

    def test_conflicting_qualifiers(self):
        with pytest.raises(
            QualifierConflictError,
            match="volatile incompatible with previous qualifier const",
        ):
            parse_declaration("const volatile int x;")

    def test_implicit_int(self):
        """A qualifier alone declares an int."""
        assert parse_declaration("const x;") == "x: const int"


class TestStorageClasses:

    def test_storage_class_goes_to_name(self):
        assert parse_declaration("static int x;") == "x: static int"

    def test_storage_class_after_type(self):
        assert parse_declaration("int extern x;") == "x: extern int"

    def test_two_storage_classes(self):
        with pytest.raises(StorageClassError, match="unexpected storage class"):
            parse_declaration("static extern int x;")

    def test_storage_class_on_pointer(self):
        assert parse_declaration("typedef char *string;") == "string: typedef pointer to char"


# =============================================================================
# Resolver Function
# =============================================================================

class TestResolveType:
    """Direct tests of resolve_type() against a lexer."""

    def test_stops_at_declarator(self):
        lexer = Lexer("unsigned char c")
        descriptor = resolve_type(lexer, ParserState())
        assert descriptor == TypeDescriptor(("unsigned", "char"))
        assert lexer.next_token().value == "c"

    def test_pending_storage_class(self):
        state = ParserState()
        resolve_type(Lexer("register int r"), state)
        assert state.storage_class == "register"

    def test_implicit_flag(self):
        descriptor = resolve_type(Lexer("volatile v"), ParserState())
        assert descriptor.implicit
        assert descriptor.text == "volatile int"

    def test_empty_input(self):
        assert resolve_type(Lexer(""), ParserState()) is None

    def test_type_at_end_of_input(self):
        """A type ending the input is still resolved and checked."""
        lexer = Lexer("unsigned long")
        assert resolve_type(lexer, ParserState()) == TypeDescriptor(("unsigned", "long"))
        assert lexer.next_token().at_end

    def test_illegal_pair_at_end_of_input(self):
        with pytest.raises(IncompatibleSpecifiersError, match="specifier signed incompatible with void"):
            resolve_type(Lexer("void signed"), ParserState())

    def test_empty_parameter_slot(self):
        """Nothing before ',' gives an implicit int; the comma is handed back."""
        lexer = Lexer(", int")
        descriptor = resolve_type(lexer, ParserState())
        assert descriptor.implicit
        assert descriptor.qualifier is None
        assert lexer.next_token().type == TokenType.COMMA

    @pytest.mark.parametrize("source", ["int", "const int", "static unsigned long"])
    def test_type_alone_is_missing_object(self, source):
        with pytest.raises(MissingElementError, match="missing object"):
            parse_declaration(source)

    def test_storage_class_alone_in_parameter_slot(self):
        with pytest.raises(MissingElementError, match="expected type"):
            parse_declaration("int f(int, static);")

    def test_descriptor_text(self):
        descriptor = TypeDescriptor(("long", "double"), "const")
        assert str(descriptor) == "const long double"
        assert not descriptor.is_void
        assert TypeDescriptor(("void",), "const").is_void
