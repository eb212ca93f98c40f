"""
Quiz-history reporting.

Modules
-------
history    : Pure analytics over QuizAttempt lists (distribution, monthly
             trends, completion rate, streak).
formatters : ASCII renderers for CLI output.
export     : Flat CSV / JSON exports of a user's history.
"""
