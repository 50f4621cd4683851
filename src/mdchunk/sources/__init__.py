from .csv_source import CSVSubstitutionSource, SubstitutionTableError, read_substitutions

__all__ = ["CSVSubstitutionSource", "SubstitutionTableError", "read_substitutions"]
