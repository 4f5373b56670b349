"""Team member form."""

from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Length, Optional, ValidationError

from blueprints.auth.forms import ApiForm
from utils.validators import validate_email


class TeamMemberForm(ApiForm):
    """Give a (new or existing) user access to a restaurant."""

    email = StringField('Email', validators=[DataRequired(message='L\'email est requis')])

    password = PasswordField('Mot de passe', validators=[
        DataRequired(message='Le mot de passe est requis'),
        Length(min=6, message='Le mot de passe doit contenir au moins 6 caractères')
    ])

    role = StringField('Rôle', default='staff', validators=[Optional(), Length(max=50)])

    first_name = StringField('Prénom', validators=[Optional(), Length(max=100)])

    last_name = StringField('Nom', validators=[Optional(), Length(max=100)])

    def validate_email(self, field):
        if not validate_email(field.data.strip()):
            raise ValidationError('Format email invalide')
