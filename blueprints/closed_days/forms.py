"""Closed day form."""

from wtforms import StringField, SelectField
from wtforms.validators import DataRequired, Optional, Length, ValidationError

from blueprints.auth.forms import ApiForm
from utils.validators import validate_date_format


class ClosedDayForm(ApiForm):
    """Close a date, or one service of a date, to bookings."""

    date = StringField('Date', validators=[DataRequired(message='La date est requise')])

    service = SelectField('Service', default='all', validate_choice=False, validators=[Optional()],
                          choices=[('all', 'Journée'), ('lunch', 'Midi'), ('dinner', 'Soir')])

    reason = StringField('Raison', validators=[Optional(), Length(max=255)])

    def validate_date(self, field):
        if not validate_date_format(field.data):
            raise ValidationError('Format de date invalide (AAAA-MM-JJ)')

    def validate_service(self, field):
        if field.data and field.data not in ('all', 'lunch', 'dinner'):
            raise ValidationError('Service invalide')
