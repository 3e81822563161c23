from gambitresults.controllers.csv_importer import CsvResultImporter
from gambitresults.controllers.result_reconciler import ResultEntryReconciler

__all__ = ["CsvResultImporter", "ResultEntryReconciler"]
