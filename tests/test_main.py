"""Runner and exploration helpers: write, read back, summarize."""

import pandas as pd
import pytest

from payment_data.explore import (
    describe_dataset, detail_share, load_dataset, missing_entities, parse_dates,
    outcome_rate_by_period, plot_outcome_rate
)
from payment_data.generator import InvalidArgument, generate, month_starts
from payment_data.main import main, write_dataset


@pytest.fixture
def monthly_table():
    return generate(
        seed=42,
        entity_count=30,
        time_buckets=month_starts("2018-01-01", "2018-06-30"),
        outcome_probability=0.8,
        detail_options=["bank transfer", "check", "credit card"],
        retained_entity_count=25,
    )


class TestWriteAndLoad:

    @pytest.mark.parametrize("suffix", [".xlsx", ".csv"])
    def test_round_trip(self, monthly_table, tmp_path, suffix):
        path = write_dataset(monthly_table, tmp_path / f"payments{suffix}")
        back = load_dataset(path)

        assert list(back.columns) == ["id", "period", "outcome", "detail"]
        assert len(back) == len(monthly_table)
        assert back["id"].tolist() == monthly_table["id"].tolist()
        assert back["period"].dtype.kind == "M"
        assert (back["detail"].isna() == (back["outcome"] == "no")).all()

    def test_csv_periods_come_back_as_dates(self, tmp_path):
        path = tmp_path / "p.csv"
        path.write_text("id,period,outcome,detail\n1,2018-01-01,yes,check\n1,2018-02-01,no,\n")
        back = load_dataset(path)
        assert back["period"].dtype.kind == "M"
        assert back["detail"].isna().tolist() == [False, True]

    def test_label_periods_left_alone(self):
        df = pd.DataFrame({"period": ["2018-01-01", "spring"]})
        assert parse_dates(df, ["period"])["period"].tolist() == ["2018-01-01", "spring"]

    def test_all_null_detail_survives(self, tmp_path):
        df = generate(seed=1, entity_count=3, time_buckets=[1, 2], outcome_probability=0.0,
                      detail_options=["A"], retained_entity_count=3)
        back = load_dataset(write_dataset(df, tmp_path / "p.csv"))
        assert back["detail"].isna().all()

    def test_unknown_suffix(self, monthly_table, tmp_path):
        with pytest.raises(InvalidArgument):
            write_dataset(monthly_table, tmp_path / "payments.parquet")


class TestExplore:

    def test_rate_by_period(self, monthly_table):
        rates = outcome_rate_by_period(monthly_table)
        assert len(rates) == 6
        assert (rates["rows"] == 25).all()
        assert rates["paid_rate"].between(0, 1).all()
        overall = (monthly_table["outcome"] == "yes").mean()
        assert rates["paid_rate"].mean() == pytest.approx(overall)

    def test_detail_share_sums_to_one(self, monthly_table):
        shares = detail_share(monthly_table)
        assert shares.sum() == pytest.approx(1.0)
        assert set(shares.index) <= {"bank transfer", "check", "credit card"}

    def test_missing_entities(self, monthly_table):
        missing = missing_entities(monthly_table, 30)
        assert len(missing) == 5
        assert not set(missing) & set(monthly_table["id"])
        assert missing == sorted(missing)

    def test_describe(self, monthly_table, capsys):
        summary = describe_dataset(monthly_table)
        assert summary["rows"] == 150
        assert summary["entities"] == 25
        assert summary["periods"] == 6
        assert "Paid share" in capsys.readouterr().out

    def test_plot_saves_file(self, monthly_table, tmp_path):
        out = tmp_path / "rate.png"
        plot_outcome_rate(monthly_table, out)
        assert out.exists()


class TestMain:

    def test_writes_csv(self, tmp_path, capsys):
        out = tmp_path / "payments.csv"
        code = main(["--entities", "20", "--retained", "18", "--output", str(out)])
        assert code == 0
        df = pd.read_csv(out)
        assert len(df) == 18 * 12
        assert "Saved:" in capsys.readouterr().out

    def test_invalid_input_exits_2(self, tmp_path, capsys):
        out = tmp_path / "payments.csv"
        code = main(["--entities", "10", "--retained", "11", "--output", str(out)])
        assert code == 2
        assert not out.exists()
        assert "error:" in capsys.readouterr().err

    def test_period_order_flag(self, tmp_path):
        out = tmp_path / "payments.csv"
        main(["--entities", "5", "--retained", "5", "--order", "period", "--output", str(out)])
        df = pd.read_csv(out)
        assert df["id"].tolist()[:10] == [1, 2, 3, 4, 5, 1, 2, 3, 4, 5]
