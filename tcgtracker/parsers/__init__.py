from tcgtracker.parsers.csv_import import ImportRow, parse_collection_csv

__all__ = [
    "ImportRow",
    "parse_collection_csv",
]
