"""Tests for streamflow_summary.py example script."""

from unittest.mock import patch

import pandas as pd

from cdss_wrapper import Reading, Timescale, CdssAPIError
from examples.streamflow_summary import main, summarize_monthly_flow


def make_readings():
    return [
        Reading(
            timescale=Timescale.MONTH,
            abbrev="PLACHECO",
            cal_year=year,
            cal_month_num=month,
            avg_q_cfs=100.0 * month + year - 2010,
            total_q_af=1000.0 * month
        )
        for year in (2010, 2011)
        for month in (1, 2)
    ]


class TestStreamflowSummary:
    """Tests for streamflow_summary.py example."""

    def test_summarize_monthly_flow(self):
        df = pd.DataFrame([r.model_dump() for r in make_readings()])

        summary = summarize_monthly_flow(df)

        assert list(summary.index) == [1, 2]
        assert summary.loc[1, 'mean_avg_q_cfs'] == 100.5
        assert summary.loc[2, 'mean_total_q_af'] == 2000.0
        assert (summary['years'] == 2).all()

    def test_summarize_empty(self):
        summary = summarize_monthly_flow(pd.DataFrame())
        assert summary.empty

    @patch('examples.streamflow_summary.CdssClient')
    def test_main_function(self, mock_client_class, capsys):
        """Test the main function's execution flow."""
        mock_client = mock_client_class.return_value
        mock_client.get_sw_ts.return_value = make_readings()

        summary = main()

        mock_client.get_sw_ts.assert_called_once()
        assert mock_client.get_sw_ts.call_args.kwargs['timescale'] == "month"
        mock_client.close.assert_called_once()
        assert len(summary) == 2
        assert "Mean flow by month" in capsys.readouterr().out

    @patch('examples.streamflow_summary.CdssClient')
    def test_main_api_error(self, mock_client_class, capsys):
        mock_client = mock_client_class.return_value
        mock_client.get_sw_ts.side_effect = CdssAPIError(500, "Internal Server Error")

        assert main() is None
        assert "Error: API request failed with status 500" in capsys.readouterr().out
        mock_client.close.assert_called_once()
