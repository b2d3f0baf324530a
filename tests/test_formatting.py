"""Tests for the explicit number formatting policy."""

from src.formatting import FormatPolicy

NNBSP = "\u202f"


class TestFormatNumber:
    """Tests for FormatPolicy.format_number (fr-FR defaults)."""

    policy = FormatPolicy()

    def test_integer(self):
        assert self.policy.format_number(5) == "5"

    def test_grouping_and_decimal_comma(self):
        assert self.policy.format_number(1234.5) == f"1{NNBSP}234,5"

    def test_at_most_two_fraction_digits(self):
        assert self.policy.format_number(2 / 3) == "0,67"

    def test_trailing_zeros_dropped(self):
        assert self.policy.format_number(62.50) == "62,5"
        assert self.policy.format_number(100.0) == "100"

    def test_negative(self):
        assert self.policy.format_number(-1234.567) == f"-1{NNBSP}234,57"

    def test_negative_rounding_to_zero(self):
        assert self.policy.format_number(-0.001) == "0"

    def test_non_finite(self):
        assert self.policy.format_number(float("nan")) == ""

    def test_other_locale(self):
        en = FormatPolicy(decimal_separator=".", group_separator=",")
        assert en.format_number(1234.5) == "1,234.5"

    def test_zero_fraction_digits(self):
        policy = FormatPolicy(max_fraction_digits=0)
        assert policy.format_number(2.6) == "3"


class TestFormatCell:
    """Tests for FormatPolicy.format_cell."""

    policy = FormatPolicy()

    def test_missing_cell_is_blank(self):
        assert self.policy.format_cell(None, False) == ""
        assert self.policy.format_cell(None, True) == ""

    def test_percent_suffix(self):
        assert self.policy.format_cell(62.5, True) == "62,5%"
        assert self.policy.format_cell("62,50%", True) == "62,5%"

    def test_non_numeric_passthrough(self):
        assert self.policy.format_cell("n/a", False) == "n/a"
        assert self.policy.format_cell("n/a", True) == "n/a"

    def test_raw_number(self):
        assert self.policy.format_cell(1234, False) == f"1{NNBSP}234"


class TestFromConfig:
    """Tests for FormatPolicy.from_config."""

    def test_reads_config_attributes(self):
        class FakeConfig:
            NUMBER_DECIMAL_SEPARATOR = "."
            NUMBER_GROUP_SEPARATOR = ","
            NUMBER_MAX_FRACTION_DIGITS = 1
            PERCENT_SUFFIX = " %"
            EMPTY_MESSAGE = "No data"

        policy = FormatPolicy.from_config(FakeConfig)
        assert policy.format_percent(1234.56) == "1,234.6 %"
        assert policy.empty_message == "No data"
