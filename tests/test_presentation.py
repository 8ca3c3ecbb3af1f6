"""
Tests for presentation: banding, group headers, display rows and the
LedgerView controller.
"""

import pytest
from datetime import date
from decimal import Decimal

from ledgerview.config.settings import ViewSettings
from ledgerview.models.ledger import (
    ActivityRecord,
    LedgerSnapshot,
    MonthGroup,
    MonthStats,
    TagPattern,
)
from ledgerview.models.view import (
    AmountClass,
    Band,
    DisplayModel,
    LoadErrorState,
    ViewState,
)
from ledgerview.presentation import (
    INITIAL_BAND_STATE,
    LedgerView,
    PresentationSequencer,
    ViewAssembler,
    advance_band,
    band_sequence,
    missing_collaborators,
    tag_pattern_rows,
)
from ledgerview.presentation.formatting import (
    format_balance_amount,
    format_date,
    format_stats,
    two_decimals,
)
from ledgerview.search import GroupFilterer, SearchPredicate, TagResolver


@pytest.fixture
def filterer(tag_dictionary) -> GroupFilterer:
    return GroupFilterer(SearchPredicate(TagResolver(tag_dictionary)))


@pytest.fixture
def assembler() -> ViewAssembler:
    return ViewAssembler(ViewSettings())


class TestFormatting:
    """Tests for display text helpers."""

    def test_format_date(self):
        assert format_date(date(2024, 1, 5)) == "05/01/2024"
        assert format_date(date(2023, 12, 31)) == "31/12/2023"

    def test_two_decimals(self):
        assert two_decimals(Decimal("10")) == "10.00"
        assert two_decimals(Decimal("-5.5")) == "-5.50"
        assert two_decimals(Decimal("1.005")) == "1.01"

    def test_two_decimals_negative_zero(self):
        assert two_decimals(Decimal("-0.001")) == "0.00"

    def test_format_stats(self):
        stats = MonthStats(amount_plus=Decimal("10"), amount_minus=Decimal("-5"))
        assert format_stats(stats) == ("+10.00", "-5.00")

    def test_format_balance_amount(self):
        assert format_balance_amount(Decimal("1234.50"), "€") == "1234.5 €"


class TestBanding:
    """Tests for the banding fold."""

    def test_first_row_is_band_a(self):
        assert band_sequence([date(2024, 1, 1)]) == [Band.A]

    def test_same_date_keeps_band(self):
        d = date(2024, 1, 1)
        assert band_sequence([d, d, d]) == [Band.A, Band.A, Band.A]

    def test_date_change_flips_band(self):
        dates = [date(2024, 1, 1), date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
        assert band_sequence(dates) == [Band.A, Band.A, Band.B, Band.A]

    def test_returning_date_still_flips(self):
        """Test only the previous row's date matters."""
        dates = [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 1)]
        assert band_sequence(dates) == [Band.A, Band.B, Band.A]

    def test_empty(self):
        assert band_sequence([]) == []

    def test_advance_band_is_pure(self):
        state = advance_band(INITIAL_BAND_STATE, date(2024, 1, 1))
        assert INITIAL_BAND_STATE.band == Band.B
        assert state.band == Band.A
        assert advance_band(state, date(2024, 1, 1)) is state


class TestPresentationSequencer:
    """Tests for row sequencing over the two-month ledger."""

    def test_no_search(self, filterer, hierarchy):
        """Test headers and bands for the full dataset."""
        rows = PresentationSequencer().sequence(filterer.filter(hierarchy, ""))

        assert len(rows) == 3
        assert [row.is_group_header for row in rows] == [True, False, True]
        assert [row.band for row in rows] == [Band.A, Band.A, Band.B]
        assert rows[0].month_label == "January"
        assert rows[0].stats_plus == "+10.00"
        assert rows[0].stats_minus == "-5.00"
        assert rows[1].month_label is None
        assert rows[2].month_label == "February"
        assert rows[2].display_date == "01/02/2024"

    def test_tag_search_promotes_header(self, filterer, hierarchy):
        """Test the only remaining row of a group becomes its header."""
        rows = PresentationSequencer().sequence(filterer.filter(hierarchy, "edf"))

        assert len(rows) == 1
        assert rows[0].activity.id == 2
        assert rows[0].is_group_header is True
        assert rows[0].band == Band.A
        assert rows[0].month_label == "January"
        assert rows[0].stats_plus == "+10.00"

    def test_untagged_search(self, filterer, hierarchy):
        rows = PresentationSequencer().sequence(filterer.filter(hierarchy, "null"))

        assert [row.activity.id for row in rows] == [1, 3]
        assert [row.is_group_header for row in rows] == [True, True]
        assert [row.band for row in rows] == [Band.A, Band.B]

    def test_emptied_middle_group_leaves_bands_alone(self, filterer):
        """Test a group with no visible row adds no flip between its neighbours."""

        def month(index: int, activity_id: int, statement: str) -> MonthGroup:
            return MonthGroup(
                month_index=index,
                stats=MonthStats(amount_plus=Decimal("1"), amount_minus=Decimal("0")),
                activities=(
                    ActivityRecord(
                        id=activity_id,
                        date=date(2024, index, 5),
                        statement=statement,
                        amount=Decimal("1"),
                        tag_pattern_id=7,
                    ),
                ),
            )

        hierarchy = (month(1, 1, "KEEP"), month(2, 2, "DROP"), month(3, 3, "KEEP"))
        filtered = filterer.filter(hierarchy, "keep")

        assert filtered[1].activities == ()

        rows = PresentationSequencer().sequence(filtered)

        assert [row.activity.id for row in rows] == [1, 3]
        assert [row.month_label for row in rows] == ["January", "March"]
        assert [row.band for row in rows] == [Band.A, Band.B]

    def test_tag_search_row_cells(self, assembler, hierarchy, tag_dictionary, balance):
        """Test a row kept by its tag alone renders with its tag name."""
        rows = assembler.render(hierarchy, tag_dictionary, balance, "edf").rows

        assert len(rows) == 1
        assert rows[0].statement == "PRLV SEPA 123"
        assert rows[0].tags == "EDF"
        assert rows[0].leading_cell == ("January", "+10.00", "-5.00")

    def test_no_match_gives_no_rows(self, filterer, hierarchy):
        assert PresentationSequencer().sequence(filterer.filter(hierarchy, "zzz")) == []

    def test_banding_depends_only_on_dates(self, filterer, hierarchy):
        rows = PresentationSequencer().sequence(filterer.filter(hierarchy, ""))
        assert [row.band for row in rows] == band_sequence(
            row.activity.date for row in rows
        )


class TestViewAssembler:
    """Tests for display model assembly."""

    def test_normal(self, assembler, hierarchy, tag_dictionary, balance):
        result = assembler.render(hierarchy, tag_dictionary, balance, "")

        assert isinstance(result, DisplayModel)
        assert result.state == ViewState.NORMAL
        assert result.caption_date == "Montant au 28/02/2024"
        assert result.caption_amount == "1234.5 €"
        assert result.row_count == 3

    def test_cells(self, assembler, hierarchy, tag_dictionary, balance):
        rows = assembler.render(hierarchy, tag_dictionary, balance, "").rows

        assert rows[0].leading_cell == ("January", "+10.00", "-5.00")
        assert rows[0].date == "05/01/2024"
        assert rows[0].statement == "VIR SALAIRE"
        assert rows[0].tags == ""
        assert rows[0].amount == "10.00"
        assert rows[0].amount_class == AmountClass.PLUS
        assert rows[0].band_class == Band.A

        assert rows[1].leading_cell == ()
        assert rows[1].tags == "EDF"
        assert rows[1].amount == "-5.00"
        assert rows[1].amount_class == AmountClass.MINUS

        assert rows[2].leading_cell == ("February", "+20.00", "0.00")
        assert rows[2].band_class == Band.B

    def test_tags_joined(self, assembler, hierarchy, tag_dictionary, balance):
        """Test several tags are joined with a comma."""
        group = hierarchy[1]
        tagged = group.activities[0].model_copy(update={"tag_pattern_id": 9})
        hierarchy = (hierarchy[0], group.model_copy(update={"activities": (tagged,)}))

        rows = assembler.render(hierarchy, tag_dictionary, balance, "").rows
        assert rows[2].tags == "FREEMOBILE, TELEPHONE"

    def test_zero_amount_is_plus(self, assembler, hierarchy, tag_dictionary, balance):
        group = hierarchy[1]
        zero = group.activities[0].model_copy(update={"amount": Decimal("0")})
        hierarchy = (hierarchy[0], group.model_copy(update={"activities": (zero,)}))

        rows = assembler.render(hierarchy, tag_dictionary, balance, "").rows
        assert rows[2].amount_class == AmountClass.PLUS

    def test_no_result(self, assembler, hierarchy, tag_dictionary, balance):
        """Test an empty search result is not a load error."""
        result = assembler.render(hierarchy, tag_dictionary, balance, "zzz")

        assert isinstance(result, DisplayModel)
        assert result.state == ViewState.NO_RESULT
        assert result.rows == ()
        assert result.caption_amount == "1234.5 €"

    def test_single_remaining_row_is_not_no_result(
        self, assembler, hierarchy, tag_dictionary, balance
    ):
        result = assembler.render(hierarchy, tag_dictionary, balance, "edf")
        assert result.state == ViewState.NORMAL
        assert result.row_count == 1

    @pytest.mark.parametrize("missing", ["hierarchy", "tags", "balance"])
    def test_load_error(self, assembler, hierarchy, tag_dictionary, balance, missing):
        """Test each missing collaborator yields a load error."""
        inputs = {"hierarchy": hierarchy, "tags": tag_dictionary, "balance": balance}
        inputs[missing] = None

        result = assembler.render(inputs["hierarchy"], inputs["tags"], inputs["balance"], "")

        assert isinstance(result, LoadErrorState)
        assert result.state == ViewState.LOAD_ERROR
        assert len(result.missing) == 1

    def test_empty_hierarchy_is_load_error(self, assembler, tag_dictionary, balance):
        result = assembler.render((), tag_dictionary, balance, "")
        assert isinstance(result, LoadErrorState)
        assert result.missing == ("activities",)

    def test_missing_collaborators_lists_all(self):
        assert missing_collaborators(None, None, None) == ["activities", "balance", "tags"]

    def test_currency_symbol(self, hierarchy, tag_dictionary, balance):
        assembler = ViewAssembler(ViewSettings(currency_symbol="$"))
        result = assembler.render(hierarchy, tag_dictionary, balance, "")
        assert result.caption_amount == "1234.5 $"


class TestTagPatternRows:
    """Tests for the tag pattern table."""

    def test_rows(self):
        rows = tag_pattern_rows([
            TagPattern(pattern="FREE MOBILE", tags=("FREEMOBILE", "TELEPHONE")),
            TagPattern(pattern="RETRAIT DAB", tags=()),
        ])
        assert rows[0].pattern == "FREE MOBILE"
        assert rows[0].tags == "FREEMOBILE, TELEPHONE"
        assert rows[1].tags == ""


class TestLedgerView:
    """Tests for the stateful controller."""

    def test_no_data_before_load(self):
        view = LedgerView()
        assert view.result.state == ViewState.NO_DATA
        assert view.on_search_string_changed("edf").state == ViewState.NO_DATA
        assert view.search == "edf"

    def test_search_after_load(self, hierarchy, tag_dictionary, balance):
        view = LedgerView()
        view.on_data_loaded(
            LedgerSnapshot(hierarchy=hierarchy, tags=tag_dictionary, balance=balance)
        )

        assert view.result.row_count == 3
        assert view.on_search_string_changed("edf").row_count == 1
        assert view.on_search_string_changed("zzz").state == ViewState.NO_RESULT
        assert view.on_search_string_changed("").row_count == 3

    def test_search_kept_across_loads(self, hierarchy, tag_dictionary, balance):
        """Test data arriving later is rendered with the current search."""
        view = LedgerView()
        view.on_search_string_changed("null")

        result = view.on_data_loaded(LedgerSnapshot(hierarchy=hierarchy))
        assert result.state == ViewState.LOAD_ERROR
        assert set(result.missing) == {"balance", "tags"}

        view.on_data_loaded(LedgerSnapshot(balance=balance))
        result = view.on_data_loaded(LedgerSnapshot(tags=tag_dictionary))

        assert result.state == ViewState.NORMAL
        assert [row.activity_id for row in result.rows] == [1, 3]

    def test_render_failure_becomes_load_error(self, hierarchy, tag_dictionary, balance):
        """Test no exception escapes the controller."""

        class BrokenAssembler(ViewAssembler):
            def render(self, *args, **kwargs):
                raise RuntimeError("boom")

        view = LedgerView(assembler=BrokenAssembler())
        result = view.on_data_loaded(
            LedgerSnapshot(hierarchy=hierarchy, tags=tag_dictionary, balance=balance)
        )

        assert isinstance(result, LoadErrorState)
        assert "boom" in result.message
