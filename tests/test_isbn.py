"""Tests for parsing, checking, normalizing, and formatting ISBNs."""

import copy
import dataclasses

from bookland.isbn import DEFAULT_PREFIX, ISBN, ISBNFormatError, Version, parse


ISBN10 = ISBN(
    version=Version.TEN,
    prefix="",
    registration_group="0",
    registrant="393",
    publication="04002",
    check_digit="X",
)

ISBN13 = ISBN(
    version=Version.THIRTEEN,
    prefix="978",
    registration_group="0",
    registrant="7777",
    publication="7777",
    check_digit="0",
)


def assert_parse_error(text: str):
    isbn = parse(text)
    assert isinstance(isbn.error, ISBNFormatError), f"{text!r} should not parse, got {isbn}"
    assert isbn.error.isbn == text
    assert isbn.version == Version.UNKNOWN
    assert not isbn.is_valid()
    assert isbn.to_string() == ""
    assert isbn.to_barcode() == ""


class TestParseISBN13:
    """Tests for parsing ISBN-13 strings."""

    def test_hyphenated_and_spaced_forms(self):
        """Every way of writing the same ISBN-13 should parse to the same record."""
        for text in [
            "ISBN 978-0-7777-7777-0",
            "ISBN 978 0 7777 7777 0",
            "978-0-7777-7777-0",
            "978 0 7777 7777 0",
            "ISBN-13 978-0-7777-7777-0",
            "isbn: 978-0-7777-7777-0",
            "  978 - 0 - 7777 - 7777 - 0  ",
        ]:
            assert parse(text) == ISBN13, text

    def test_solid_digits(self):
        """An unhyphenated ISBN-13 should be split with the range tables."""
        for text in ["9780777777770", "ISBN 9780777777770", "ISBN-13 9780777777770", "ISBN9780777777770"]:
            assert parse(text) == ISBN13, text

    def test_solid_digits_real_book(self):
        """A real ISBN-13 should split according to the range tables."""
        isbn = parse("9780596520687")
        assert isbn.error is None
        assert isbn.version == Version.THIRTEEN
        assert isbn.prefix == "978"
        assert isbn.registration_group == "0"
        assert isbn.registrant == "5965"
        assert isbn.publication == "2068"
        assert isbn.check_digit == "7"
        assert isbn.is_valid()

    def test_979_prefix_when_hyphenated(self):
        """A hyphenated ISBN-13 may use the 979 prefix."""
        isbn = parse("979-10-90636-07-1")
        assert isbn.error is None
        assert isbn.version == Version.THIRTEEN
        assert isbn.prefix == "979"
        assert isbn.registration_group == "10"


class TestParseISBN10:
    """Tests for parsing ISBN-10 strings."""

    def test_hyphenated_and_spaced_forms(self):
        """Every way of writing the same ISBN-10 should parse to the same record."""
        for text in [
            "ISBN 0-393-04002-X",
            "ISBN 0 393 04002 X",
            "0-393-04002-X",
            "0 393 04002 X",
            "ISBN-10 0-393-04002-X",
        ]:
            assert parse(text) == ISBN10, text

    def test_solid_digits(self):
        """An unhyphenated ISBN-10 should be split with the range tables."""
        for text in ["039304002X", "ISBN 039304002X", "ISBN-10 039304002X"]:
            assert parse(text) == ISBN10, text

    def test_lowercase_check_character(self):
        """A lowercase x check character is accepted and kept as written."""
        isbn = parse("0-393-04002-x")
        assert isbn.error is None
        assert isbn.check_digit == "x"
        assert isbn.is_valid()

    def test_ten_digits_starting_with_978(self):
        """Unhyphenated digits starting with 978 are read as an ISBN-13, so ten of them are too few."""
        assert_parse_error("9781234563")
        assert "expected 13 digits" in parse("9781234563").error.reason

    def test_range_table_splits(self):
        """Unhyphenated ISBN-10s are split according to each band of the range tables."""
        cases = [
            # 2 digit group, 2 digit registrant from the 89000-94999 band
            ("8090000002", "80", "90", "00000", "2"),
            # 4 digit group
            ("990012345X", "9900", "12", "345", "X"),
            # 5 digit group
            ("9990012342", "99900", "12", "34", "2"),
            # 5 digit registrant
            ("0990001237", "0", "99000", "123", "7"),
        ]
        for text, group, registrant, publication, check_digit in cases:
            isbn = parse(text)
            assert isbn.error is None, text
            assert isbn.registration_group == group, text
            assert isbn.registrant == registrant, text
            assert isbn.publication == publication, text
            assert isbn.check_digit == check_digit, text
            assert isbn.is_valid(), text

    def test_parse_does_not_check_the_check_digit(self):
        """A wrong check digit still parses; it is only reported by is_valid()."""
        isbn = parse("0-393-04002-2")
        assert isbn.error is None
        assert isbn.version == Version.TEN
        assert not isbn.is_valid()


class TestParseErrors:
    """Tests for input that is not an ISBN."""

    def test_wrong_number_of_digits(self):
        """Too few or too many digits is an error."""
        for text in ["12345", "03930400", "03930400211", "978077777777", "97807777777701"]:
            assert_parse_error(text)

    def test_empty_input(self):
        """Empty input or a bare label is an error."""
        for text in ["", "   ", "ISBN", "ISBN-10", "---"]:
            assert_parse_error(text)

    def test_wrong_number_of_groups(self):
        """Only 1, 4 or 5 groups of digits are allowed."""
        for text in ["0-393-04002", "0393-04002X", "978-0-7777-7777-0-1", "9-7-8-0-7-7"]:
            assert_parse_error(text)

    def test_unexpected_characters(self):
        """Letters and punctuation other than hyphens are rejected."""
        for text in ["0-393-0400A-X", "0.393.04002.X", "03930X4002", "X-393-04002-0", "ISBN 978-0-7777-7777-0!"]:
            assert_parse_error(text)

    def test_check_digit_must_be_one_character(self):
        """The last group of a hyphenated ISBN is the check digit and must be one character."""
        for text in ["0-393-0400-2X", "0-39-304002-XX", "978-0-7777-777-70"]:
            assert_parse_error(text)

    def test_body_must_be_nine_digits(self):
        """Registration group, registrant and publication must add up to nine digits."""
        for text in ["0-393-0400-X", "0-393-040022-X", "978-0-7777-77777-0"]:
            assert_parse_error(text)

    def test_isbn13_check_digit_cannot_be_x(self):
        """X is only a check digit in ISBN-10."""
        for text in ["978-0-7777-7777-X", "978077777777X"]:
            assert_parse_error(text)

    def test_isbn13_prefix_must_be_bookland(self):
        """A hyphenated ISBN-13 must start with 978 or 979."""
        for text in ["977-0-7777-7777-0", "0-393-0400-2-X"]:
            assert_parse_error(text)

    def test_solid_isbn13_must_use_default_prefix(self):
        """An unhyphenated 13 digit number without the 978 prefix is not recognised."""
        assert_parse_error("9791090636071")

    def test_registration_group_too_long(self):
        """A hyphenated registration group longer than five digits is an error."""
        assert_parse_error("123456-7-8-9")

    def test_unallocated_registration_group(self):
        """Registration groups in the 6xxxx band and at 99999 are not allocated."""
        for text in ["6123456789", "9786123456789", "9999912345"]:
            assert_parse_error(text)

    def test_no_room_for_publication(self):
        """When group and registrant use up the body there is no publication element."""
        for text in ["9990056789", "9990050000"]:
            assert_parse_error(text)
            assert "no digits left for the publication element" in parse(text).error.reason

    def test_version_label_mismatch(self):
        """An ISBN-10 or ISBN-13 label must agree with the number."""
        for text in ["ISBN-13 0-393-04002-X", "ISBN-13 039304002X", "ISBN-10 9780777777770", "ISBN-10 978-0-7777-7777-0"]:
            assert_parse_error(text)

    def test_error_reason(self):
        """The error should say what was wrong."""
        isbn = parse("12345")
        assert isbn.error is not None
        assert "expected 10 digits" in isbn.error.reason
        assert "12345" in str(isbn.error)

    def test_error_is_a_value_error(self):
        """ISBNFormatError can be caught as a ValueError."""
        isbn = parse("not an isbn")
        assert isinstance(isbn.error, ValueError)


class TestIsValid:
    """Tests for check digit validation."""

    def test_valid_records(self):
        """The reference ISBN-10 and ISBN-13 records are valid."""
        assert ISBN10.is_valid()
        assert ISBN13.is_valid()

    def test_wrong_check_digit(self):
        """A wrong check digit makes a record invalid."""
        assert not dataclasses.replace(ISBN10, check_digit="2").is_valid()
        assert not dataclasses.replace(ISBN13, check_digit="8").is_valid()

    def test_error_record_is_never_valid(self):
        """A record carrying an error is invalid whatever its other fields say."""
        isbn = dataclasses.replace(ISBN10, error=ISBNFormatError("x", "something happened"))
        assert not isbn.is_valid()

    def test_check_digit_must_be_one_character(self):
        """Records built by hand with a bad check digit field are invalid."""
        assert not dataclasses.replace(ISBN10, check_digit="").is_valid()
        assert not dataclasses.replace(ISBN10, check_digit="XX").is_valid()

    def test_unknown_version_is_never_valid(self):
        """A record without a version is invalid."""
        assert not ISBN().is_valid()
        assert not dataclasses.replace(ISBN13, version=Version.UNKNOWN).is_valid()

    def test_single_digit_errors_are_detected(self):
        """Changing any one digit before the check digit makes the ISBN invalid."""
        for barcode in ["9780777777770", "039304002X", "9780596520687", "0596520689"]:
            assert parse(barcode).is_valid(), barcode
            for i in range(len(barcode) - 1):
                corrupted = barcode[:i] + str((int(barcode[i]) + 1) % 10) + barcode[i + 1 :]
                assert not parse(corrupted).is_valid(), corrupted


class TestNormalize:
    """Tests for converting ISBN-10 into ISBN-13."""

    def test_isbn10_becomes_isbn13(self):
        """Normalizing an ISBN-10 adds the prefix and recalculates the check digit."""
        isbn = copy.copy(ISBN10)
        isbn.normalize()
        assert isbn.version == Version.THIRTEEN
        assert isbn.prefix == DEFAULT_PREFIX
        assert isbn.check_digit == "9"
        assert isbn.to_string() == "ISBN 978-0-393-04002-9"
        assert isbn.is_valid()

    def test_elements_are_unchanged(self):
        """Only prefix, version and check digit change."""
        isbn = parse("0-393-04002-X").normalize()
        assert isbn.registration_group == "0"
        assert isbn.registrant == "393"
        assert isbn.publication == "04002"

    def test_returns_the_same_record(self):
        """normalize() works in place and returns the record for chaining."""
        isbn = parse("039304002X")
        assert isbn.normalize() is isbn

    def test_valid_isbn13_is_unchanged(self):
        """Normalizing a valid ISBN-13 has no effect."""
        isbn = copy.copy(ISBN13)
        isbn.normalize()
        assert isbn == ISBN13

    def test_valid_979_isbn13_keeps_its_prefix(self):
        """A valid ISBN-13 with the 979 prefix is not rewritten to 978."""
        isbn = parse("979-10-90636-07-1")
        assert isbn.is_valid()
        isbn.normalize()
        assert isbn.prefix == "979"

    def test_invalid_isbn13_check_digit_is_recalculated(self):
        """Normalizing an ISBN-13 with a wrong check digit fixes the check digit."""
        isbn = dataclasses.replace(ISBN13, check_digit="5")
        isbn.normalize()
        assert isbn.check_digit == ISBN13.check_digit
        assert isbn == ISBN13

    def test_error_record_is_unchanged(self):
        """Normalizing a record that failed to parse does nothing."""
        isbn = parse("12345")
        before = copy.copy(isbn)
        isbn.normalize()
        assert isbn == before
        assert isbn.version == Version.UNKNOWN
        assert isbn.prefix == ""

    def test_idempotent(self):
        """Normalizing twice is the same as normalizing once."""
        for text in ["039304002X", "0-393-04002-2", "9780777777778", "ISBN 978-0-7777-7777-0", "12345"]:
            once = parse(text).normalize()
            twice = copy.copy(once).normalize()
            assert twice == once, text


class TestFormatting:
    """Tests for the string and barcode forms."""

    def test_to_string(self):
        """The string form is labelled and hyphenated."""
        assert ISBN10.to_string() == "ISBN 0-393-04002-X"
        assert ISBN13.to_string() == "ISBN 978-0-7777-7777-0"
        assert str(ISBN13) == "ISBN 978-0-7777-7777-0"

    def test_to_barcode(self):
        """The barcode form is the bare digits."""
        assert ISBN10.to_barcode() == "039304002X"
        assert ISBN13.to_barcode() == "9780777777770"

    def test_unknown_version_formats_as_empty_string(self):
        """A record without a version has no string form."""
        assert ISBN().to_string() == ""
        assert str(ISBN()) == ""

    def test_barcode_shape(self):
        """Barcodes are 13 digits for ISBN-13 and 9 digits plus a check character for ISBN-10."""
        for text in ["978-0-7777-7777-0", "9780596520687", "ISBN 978 0 393 04002 9"]:
            barcode = parse(text).to_barcode()
            assert len(barcode) == 13, text
            assert barcode.isdigit(), text
        for text in ["0-393-04002-X", "0596520689", "0-393-04002-x"]:
            barcode = parse(text).to_barcode()
            assert len(barcode) == 10, text
            assert barcode[:9].isdigit(), text
            assert barcode[9] in "0123456789Xx", text

    def test_string_form_round_trips(self):
        """Parsing the string form of a record gives back the same record."""
        for text in ["9780777777770", "039304002X", "9780596520687", "979-10-90636-07-1"]:
            isbn = parse(text)
            assert parse(isbn.to_string()) == isbn, text

    def test_asdict(self):
        """asdict gives a JSON-friendly view including validity."""
        result = ISBN10.asdict
        assert result["version"] == 10
        assert result["registrant"] == "393"
        assert result["valid"] is True
        assert result["error"] is None
        assert result["isbn"] == "ISBN 0-393-04002-X"
        assert result["barcode"] == "039304002X"

    def test_asdict_for_error_record(self):
        """asdict of a failed parse carries the reason and no elements."""
        result = parse("12345").asdict
        assert result["version"] == 0
        assert result["valid"] is False
        assert "expected 10 digits" in result["error"]
        assert result["isbn"] == ""
