"""Example of summarizing monthly streamflow with pandas"""
from datetime import date
import os

from dotenv import load_dotenv
import pandas as pd

from cdss_wrapper import CdssClient, CdssConfig, CdssError, records_to_dataframe


def summarize_monthly_flow(df: pd.DataFrame) -> pd.DataFrame:
    """
    Summarize monthly surface water readings by calendar month

    Args:
        df: DataFrame of monthly readings (cal_month_num, avg_q_cfs, total_q_af)

    Returns:
        DataFrame indexed by month number with mean flow, mean volume and
        the number of years averaged
    """
    if df.empty:
        return pd.DataFrame(columns=['mean_avg_q_cfs', 'mean_total_q_af', 'years'])

    grouped = df.groupby('cal_month_num')
    return pd.DataFrame({
        'mean_avg_q_cfs': grouped['avg_q_cfs'].mean(),
        'mean_total_q_af': grouped['total_q_af'].mean(),
        'years': grouped['cal_year'].nunique()
    })


def main():
    # Load environment variables
    load_dotenv()

    client = CdssClient(CdssConfig(api_key=os.getenv('CDSS_API_KEY')))

    abbrev = "PLACHECO"
    start_date = date(2010, 1, 1)
    end_date = date(2020, 12, 31)

    print("\n=== Monthly Streamflow Summary ===")
    print(f"Station: {abbrev}")
    print(f"Years: {start_date.year} to {end_date.year}")

    try:
        readings = client.get_sw_ts(
            abbrev=abbrev,
            start_date=start_date,
            end_date=end_date,
            timescale="month"
        )
    except CdssError as e:
        print(f"Error: {str(e)}")
        return None
    finally:
        client.close()

    df = records_to_dataframe(readings)
    if df.empty:
        print("No data returned from API")
        return None

    summary = summarize_monthly_flow(df)
    print("\nMean flow by month:")
    print(summary.round(1))
    return summary


if __name__ == "__main__":
    main()
