from .progress_service import ProgressAggregator, ProgressRecord
