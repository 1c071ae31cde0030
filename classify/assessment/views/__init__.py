from .quiz_views import QuizByLessonView, SubmitQuizByLessonView
