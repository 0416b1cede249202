import pytest

from bankscraper.bankerrors import AmountParseError, MalformedRowError
from bankscraper.bankscraper import RowExtractor, TransactionRecord, parse_leading_int


@pytest.mark.parametrize(
    ("cell", "amount", "currency"),
    [
        ("250€", 250, "€"),
        ("800€", 800, "€"),
        ("1234$", 1234, "$"),
        ("-15€", -15, "€"),
    ],
)
def test_amount_and_currency_split(cell, amount, currency):
    rec = RowExtractor().parse(["Savings", "Transaction 2", cell])
    assert rec.amount == amount
    assert rec.currency == currency


def test_parse_keeps_labels_verbatim():
    rec = RowExtractor().parse(["Checking ", "Transaction 3", "800€"])
    assert rec == TransactionRecord("Checking ", "Transaction 3", 800, "€")


def test_parse_twice_gives_equal_records():
    row = ["Savings", "Transaction 2", "250€"]
    ext = RowExtractor()
    assert ext.parse(row) == ext.parse(row)


def test_leading_integer_ignores_trailing_content():
    rec = RowExtractor().parse(["Savings", "T", "12.50€"])
    assert rec.amount == 12
    assert rec.currency == "€"


def test_cell_without_symbol_drops_last_digit():
    # The last character is always taken as the currency.
    rec = RowExtractor().parse(["Savings", "T", "250"])
    assert rec.amount == 25
    assert rec.currency == "0"


@pytest.mark.parametrize("cell", ["€", "", "abc€", " €"])
def test_amount_without_integer_raises(cell):
    with pytest.raises(AmountParseError) as exc_info:
        RowExtractor().parse(["Savings", "T", cell])
    assert exc_info.value.cell == cell


@pytest.mark.parametrize(
    "row",
    [["only", "two"], [], ["a", "b", "1€", "extra"], "abc"],
)
def test_wrong_cell_count_raises(row):
    with pytest.raises(MalformedRowError):
        RowExtractor().parse(row)


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        RowExtractor().parse(["only", "two"])


@pytest.mark.parametrize(
    ("text", "expected"),
    [("42", 42), ("  7x", 7), ("+3", 3), ("x1", None), ("", None)],
)
def test_parse_leading_int(text, expected):
    assert parse_leading_int(text) == expected


def test_to_dict_shape():
    rec = TransactionRecord("Savings", "Transaction 2", 250, "€")
    assert rec.to_dict() == {
        "Account": "Savings",
        "Transaction": "Transaction 2",
        "Amount": 250,
        "Currency": "€",
    }


def test_record_is_immutable():
    rec = TransactionRecord("Savings", "Transaction 2", 250, "€")
    with pytest.raises(AttributeError):
        rec.amount = 1


@pytest.mark.parametrize("cell", ["١٢€", "１２€", "٣$"])
def test_non_ascii_digits_are_not_an_amount(cell):
    with pytest.raises(AmountParseError):
        RowExtractor().parse(["Savings", "T", cell])


def test_non_ascii_digits_end_the_integer_prefix():
    rec = RowExtractor().parse(["Savings", "T", "7١€"])
    assert rec.amount == 7
