"""
Quiz static data and per-attempt answer state.

Modules
-------
question_bank : QuestionBank + load_question_bank() — JSON → validated questions.
catalog       : CareerCatalog + load_career_catalog() — JSON → career-path records.
session       : AnswerSheet (immutable answer set, last write wins) and
                QuizSession (one-question-at-a-time progression).
"""
