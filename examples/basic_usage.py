from datetime import date, timedelta
import os

from dotenv import load_dotenv

from cdss_wrapper import CdssClient, CdssConfig, records_to_dataframe


def main():
    """Example usage of the CDSS API client"""
    # Load environment variables
    load_dotenv()

    # Create client with optional API key
    config = CdssConfig(api_key=os.getenv('CDSS_API_KEY'))

    with CdssClient(config) as client:
        # Arkansas River near Pueblo
        abbrev = "PLACHECO"

        end_date = date.today()
        start_date = end_date - timedelta(days=30)

        print(f"Fetching daily discharge for {abbrev}")
        print(f"Time range: {start_date} to {end_date}")

        readings = client.get_telemetry_ts(
            abbrev=abbrev,
            start_date=start_date,
            end_date=end_date,
            timescale="day"
        )

        df = records_to_dataframe(readings)
        if not df.empty:
            print("\nData retrieved successfully!")
            print("\nFirst few rows:")
            print(df[['abbrev', 'parameter', 'meas_date', 'meas_value', 'meas_unit']].head())
            print(f"\nTotal records: {len(df)}")
        else:
            print("\nNo data found for the specified parameters")

        # Structures within 5 miles of downtown Denver
        structures = client.get_structures(aoi=[-104.99, 39.74], radius=5)
        print(f"\nStructures near Denver: {len(structures)}")
        for structure in structures[:5]:
            print(f"  {structure.wdid} {structure.structure_name} ({structure.structure_type})")


if __name__ == "__main__":
    main()
