"""
Authentication forms using Flask-WTF.
Validate JSON bodies of the auth and account endpoints.

API forms disable the per-form CSRF field: CSRFProtect checks the
X-CSRFToken header for the whole application.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, Optional


class ApiForm(FlaskForm):
    """Base form for JSON API bodies."""

    class Meta:
        csrf = False


class LoginForm(ApiForm):
    """Login form with email and password."""

    email = StringField('Email', validators=[
        DataRequired(message='Email et mot de passe requis')
    ])

    password = PasswordField('Mot de passe', validators=[
        DataRequired(message='Email et mot de passe requis')
    ])

    remember_me = BooleanField('Se souvenir de moi')


class RegisterForm(ApiForm):
    """Account creation form."""

    email = StringField('Email', validators=[
        DataRequired(message='L\'email est requis'),
        Email(message='Format d\'email invalide')
    ])

    password = PasswordField('Mot de passe', validators=[
        DataRequired(message='Le mot de passe est requis'),
        Length(min=6, message='Le mot de passe doit contenir au moins 6 caractères')
    ])

    first_name = StringField('Prénom', validators=[Optional(), Length(max=100)])

    last_name = StringField('Nom', validators=[Optional(), Length(max=100)])


class AdminUserForm(RegisterForm):
    """User creation form for administrators."""

    is_admin = BooleanField('Administrateur')


class PasswordResetForm(ApiForm):
    """Password reset by an administrator."""

    password = PasswordField('Nouveau mot de passe', validators=[
        DataRequired(message='Le mot de passe est requis'),
        Length(min=6, message='Le mot de passe doit contenir au moins 6 caractères')
    ])
