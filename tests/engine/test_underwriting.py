from decimal import Decimal

from src.engine.loan_products import DEFAULT_CATALOG
from src.engine.underwriting import VERDICT_DESCRIPTIONS, classify_flip, loan_warnings
from src.models.results import DealVerdict

RANK = [
    DealVerdict.NOT_RECOMMENDED,
    DealVerdict.CAUTION,
    DealVerdict.GOOD,
    DealVerdict.EXCELLENT,
]


class TestClassifyFlip:
    def test_excellent(self):
        assert classify_flip(Decimal("33.23"), Decimal("86400")) == DealVerdict.EXCELLENT

    def test_profit_must_exceed_threshold(self):
        """High ROI with exactly $50K profit drops to the next tier."""
        assert classify_flip(Decimal("30"), Decimal("50000")) == DealVerdict.GOOD
        assert classify_flip(Decimal("30"), Decimal("50000.01")) == DealVerdict.EXCELLENT

    def test_roi_threshold_is_inclusive(self):
        assert classify_flip(Decimal("25"), Decimal("60000")) == DealVerdict.EXCELLENT
        assert classify_flip(Decimal("24.9999"), Decimal("60000")) == DealVerdict.GOOD

    def test_good(self):
        assert classify_flip(Decimal("15"), Decimal("30000")) == DealVerdict.GOOD

    def test_caution(self):
        assert classify_flip(Decimal("5"), Decimal("1")) == DealVerdict.CAUTION
        assert classify_flip(Decimal("40"), Decimal("20000")) == DealVerdict.CAUTION

    def test_not_recommended(self):
        assert classify_flip(Decimal("5"), Decimal("0")) == DealVerdict.NOT_RECOMMENDED
        assert classify_flip(Decimal("4.99"), Decimal("100000")) == DealVerdict.NOT_RECOMMENDED
        assert classify_flip(Decimal("-10"), Decimal("-5000")) == DealVerdict.NOT_RECOMMENDED

    def test_monotonic_in_roi_and_profit(self):
        rois = [Decimal(x) for x in ("-10", "0", "4.99", "5", "10", "15", "20", "25", "50")]
        profits = [Decimal(x) for x in ("-1", "0", "1", "25000", "25001", "50000", "50001", "200000")]
        for profit in profits:
            ranks = [RANK.index(classify_flip(r, profit)) for r in rois]
            assert ranks == sorted(ranks)
        for r in rois:
            ranks = [RANK.index(classify_flip(r, p)) for p in profits]
            assert ranks == sorted(ranks)

    def test_every_verdict_has_a_description(self):
        assert set(VERDICT_DESCRIPTIONS) == set(DealVerdict)


class TestLoanWarnings:
    def test_ltv_and_credit(self):
        product = DEFAULT_CATALOG.get("dscr")
        warnings = loan_warnings(product, Decimal("500000"), Decimal("90.9091"), Decimal("0"), 600)
        assert warnings == [
            "LTV of 90.9% exceeds max of 80%",
            "Credit score 600 below minimum of 660",
        ]

    def test_dscr_below_minimum(self):
        product = DEFAULT_CATALOG.get("dscr")
        warnings = loan_warnings(product, Decimal("400000"), Decimal("70"), Decimal("0.85"), 740)
        assert warnings == ["DSCR of 0.85 below minimum of 1.0"]

    def test_zero_dscr_is_not_flagged(self):
        """No rent supplied means DSCR was never computed."""
        product = DEFAULT_CATALOG.get("dscr")
        assert loan_warnings(product, Decimal("400000"), Decimal("70"), Decimal("0"), 740) == []

    def test_missing_credit_score_is_not_flagged(self):
        product = DEFAULT_CATALOG.get("dscr")
        assert loan_warnings(product, Decimal("400000"), Decimal("70"), Decimal("0"), None) == []

    def test_amount_limits(self):
        product = DEFAULT_CATALOG.get("dscr")
        low = loan_warnings(product, Decimal("50000"), Decimal("0"), Decimal("0"), None)
        high = loan_warnings(product, Decimal("3500000"), Decimal("0"), Decimal("0"), None)
        assert low == ["Loan amount below minimum of $75,000"]
        assert high == ["Loan amount exceeds maximum of $3,000,000"]

    def test_products_without_limits(self):
        """SBA 7(a) carries no LTV, credit or DSCR limits."""
        product = DEFAULT_CATALOG.get("sba_7a")
        assert loan_warnings(product, Decimal("100000"), Decimal("150"), Decimal("0.5"), 500) == []
