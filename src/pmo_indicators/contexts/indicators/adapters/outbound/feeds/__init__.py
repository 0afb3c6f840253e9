from .csv_bar_feed import load_bars_from_csv

__all__ = ["load_bars_from_csv"]
