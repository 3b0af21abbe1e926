"""
Unit tests for the schema value objects.
"""

import pytest

from schemaport.exceptions import InvalidColumnDefinition, InvalidForeignKey, SchemaError, UnknownColumnType
from schemaport.schema.core import (
    Column,
    ColumnType,
    ForeignKeyConstraint,
    ForeignKeyOptions,
    Index,
    Sequence,
    coerce_column_type,
    normalize_referential_action,
)
from schemaport.schema.naming import generate_identifier_name


class TestColumn:
    """Tests for Column."""

    def test_defaults(self):
        """Columns are NOT NULL with precision 10 and scale 0 by default."""
        column = Column("id", "integer")
        assert column.column_type == ColumnType.INTEGER
        assert column.nullable is False
        assert (column.precision, column.scale) == (10, 0)
        assert column.quoted is False

    def test_user_quoted_name(self):
        """Quotes are stripped and remembered."""
        column = Column('"Create"', ColumnType.STRING, length=10)
        assert column.name == "Create"
        assert column.quoted is True
        assert column.key == "create"

    def test_empty_name(self):
        """Empty names are rejected."""
        with pytest.raises(InvalidColumnDefinition):
            Column("", "integer")

    def test_unknown_type(self):
        """Unknown type tags are rejected."""
        with pytest.raises(UnknownColumnType, match="geometry"):
            Column("shape", "geometry")

    def test_scale_above_precision(self):
        """Precision must be at least the scale."""
        with pytest.raises(InvalidColumnDefinition):
            Column("amount", "decimal", precision=2, scale=4)

    def test_negative_scale(self):
        """Scale cannot be negative."""
        with pytest.raises(InvalidColumnDefinition):
            Column("amount", "decimal", precision=2, scale=-1)

    def test_fixed_requires_length(self):
        """Fixed strings and binaries need a length."""
        with pytest.raises(InvalidColumnDefinition):
            Column("code", "string", fixed=True)
        with pytest.raises(InvalidColumnDefinition):
            Column("digest", "binary", fixed=True)

    def test_non_int_length(self):
        """Lengths must be integers."""
        with pytest.raises(TypeError):
            Column("code", "string", length="10")

    def test_coerce_column_type(self):
        """Type tags are case-insensitive."""
        assert coerce_column_type(" DateTimeTZ ") == ColumnType.DATETIMETZ
        assert coerce_column_type(ColumnType.JSON) == ColumnType.JSON


class TestIndex:
    """Tests for Index."""

    def test_primary_implies_unique(self):
        """Primary indexes are unique."""
        assert Index("primary", ["id"], primary=True).unique is True

    def test_quoted_columns_are_recorded(self):
        """Quoted column names are unwrapped and remembered."""
        index = Index("idx", ['"create"', "foo"])
        assert index.columns == ["create", "foo"]
        assert index.is_column_quoted("CREATE")
        assert not index.is_column_quoted("foo")

    def test_empty_columns(self):
        """Indexes need at least one column."""
        with pytest.raises(TypeError):
            Index("idx", [])

    def test_spans(self):
        """An index spans any leading prefix of its columns."""
        index = Index("idx", ["a", "b", "c"])
        assert index.spans(["A", "b"])
        assert not index.spans(["b"])

    def test_same_definition_ignores_name(self):
        """Structural equality ignores the name."""
        assert Index("idx_a", ["a", "b"]).same_definition(Index("idx_b", ["A", "B"]))
        assert not Index("idx_a", ["a"]).same_definition(Index("idx_a", ["a"], unique=True))
        assert not Index("idx_a", ["a"]).same_definition(Index("idx_a", ["a"], where="a > 0"))


class TestForeignKey:
    """Tests for ForeignKeyConstraint and its options."""

    def test_mismatched_column_counts(self):
        """Local and referenced column counts must match."""
        with pytest.raises(InvalidForeignKey):
            ForeignKeyConstraint(["a", "b"], "other", ["id"])

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("cascade", "CASCADE"),
            ("CaScAdE", "CASCADE"),
            ("set null", "SET NULL"),
            ("set_null", "SET NULL"),
            ("no  action", "NO ACTION"),
            ("restrict", "RESTRICT"),
            ("set default", "SET DEFAULT"),
            ("bogus", "BOGUS"),
            (None, None),
        ],
    )
    def test_action_normalization(self, raw, expected):
        """Actions are normalized case-insensitively."""
        assert normalize_referential_action(raw) == expected

    def test_options_normalized_on_construction(self):
        """ForeignKeyOptions stores normalized actions."""
        options = ForeignKeyOptions(on_delete="cascade", on_update="set null")
        assert (options.on_delete, options.on_update) == ("CASCADE", "SET NULL")

    def test_quoted_names(self):
        """Quoted table and column names are unwrapped and remembered."""
        fk = ForeignKeyConstraint(["`bar`"], '"Users"', ['"id"'], name='"FK"')
        assert fk.local_columns == ["bar"]
        assert fk.quoted_local_columns == frozenset({"bar"})
        assert (fk.foreign_table, fk.foreign_table_quoted) == ("Users", True)
        assert (fk.name, fk.quoted) == ("FK", True)

    def test_same_definition(self):
        """Structural equality includes the options."""
        a = ForeignKeyConstraint(["a"], "t", ["id"], name="fk_a")
        b = ForeignKeyConstraint(["A"], "T", ["ID"], name="fk_b")
        c = ForeignKeyConstraint(["a"], "t", ["id"], options=ForeignKeyOptions(on_delete="CASCADE"))
        assert a.same_definition(b)
        assert not a.same_definition(c)

    def test_options_type_checked(self):
        """Options must be a ForeignKeyOptions instance."""
        with pytest.raises(TypeError):
            ForeignKeyConstraint(["a"], "t", ["id"], options={"on_delete": "CASCADE"})


class TestSequence:
    """Tests for Sequence."""

    def test_increment_must_be_positive(self):
        """Zero or negative increments are rejected."""
        with pytest.raises(SchemaError):
            Sequence("seq", increment=0)

    def test_negative_cache(self):
        """Negative cache sizes are rejected."""
        with pytest.raises(SchemaError):
            Sequence("seq", cache_size=-1)


class TestGeneratedNames:
    """Tests for generate_identifier_name."""

    def test_known_hash(self):
        """The name is the upper-cased prefix and CRC32 digests."""
        assert generate_identifier_name(["test", "foo", "bar"], "uniq") == "UNIQ_D87F7E0C8C73652176FF8CAA"

    def test_deterministic(self):
        """The same parts always give the same name."""
        assert generate_identifier_name(["t", "a"], "idx") == generate_identifier_name(["t", "a"], "idx")

    def test_truncated(self):
        """Names are cut to the maximum size."""
        name = generate_identifier_name([f"c{i}" for i in range(20)], "idx")
        assert len(name) == 63
        assert generate_identifier_name(["a", "b"], "fk", max_size=10) == generate_identifier_name(["a", "b"], "fk")[:10]
