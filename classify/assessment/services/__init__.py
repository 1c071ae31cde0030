from .grading_service import GradingEngine, GradingResult, QuestionResult
