"""
Classify Users Views Package

Registration, login and current-user endpoints.
"""

from .auth_views import LoginView, MeView, RegisterView
