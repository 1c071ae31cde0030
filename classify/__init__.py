"""
Classify Package - Learning Management Backend

This package contains the learning platform: a catalog of courses, lessons
and quizzes, per-user progress tracking and a self-issued bearer token
authentication layer.

Features:
- Bearer token issuing and verification (HMAC-SHA256 signed)
- Transactional quiz grading with per-question results
- Progress views derived on read from lesson completions and submissions
- Course catalog and enrollment bookkeeping

Structure:
- authentication/: Token codec, auth gate and DRF authentication class
- users/: Profiles, registration and login
- courses/: Courses, lessons, enrollments and lesson completion events
- assessment/: Quizzes, submissions and the grading service
- progress/: Read-side progress aggregation
- management/: Django management commands

Author: Classify Development Team
Version: 1.0.0
"""
