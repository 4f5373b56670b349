"""
Booking forms using Flask-WTF.
Validate JSON bodies of public and dashboard booking requests.
"""

from wtforms import StringField, IntegerField, BooleanField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, ValidationError

from blueprints.auth.forms import ApiForm
from utils.validators import validate_date_format, validate_time_format, validate_email, validate_phone


class BookingFormMixin:
    """Field-level checks shared by booking forms."""

    def validate_date(self, field):
        if not validate_date_format(field.data):
            raise ValidationError('Format de date invalide (AAAA-MM-JJ)')

    def validate_time(self, field):
        if not validate_time_format(field.data):
            raise ValidationError('Format d\'heure invalide (HH:MM)')


class PublicBookingForm(BookingFormMixin, ApiForm):
    """Booking request submitted from the public restaurant page."""

    restaurant_id = IntegerField('Restaurant', validators=[
        InputRequired(message='Le restaurant est requis')
    ])

    date = StringField('Date', validators=[DataRequired(message='La date est requise')])

    time = StringField('Heure', validators=[DataRequired(message='L\'heure est requise')])

    guests = IntegerField('Personnes', validators=[
        InputRequired(message='Le nombre de personnes est requis'),
        NumberRange(min=1, max=100, message='Nombre de personnes invalide')
    ])

    children = IntegerField('Enfants', default=0, validators=[
        Optional(),
        NumberRange(min=0, max=50, message='Nombre d\'enfants invalide')
    ])

    first_name = StringField('Prénom', validators=[
        DataRequired(message='Le prénom est requis'),
        Length(max=100)
    ])

    last_name = StringField('Nom', validators=[
        DataRequired(message='Le nom est requis'),
        Length(max=100)
    ])

    email = StringField('Email', validators=[DataRequired(message='L\'email est requis')])

    phone = StringField('Téléphone', validators=[DataRequired(message='Le téléphone est requis')])

    special_request = StringField('Demande spéciale', validators=[Optional(), Length(max=1000)])

    newsletter = BooleanField('Newsletter')

    def validate_email(self, field):
        if not validate_email(field.data.strip()):
            raise ValidationError('Format email invalide')

    def validate_phone(self, field):
        if not validate_phone(field.data):
            raise ValidationError('Numéro de téléphone invalide')


class OwnerBookingForm(BookingFormMixin, ApiForm):
    """Booking entered from the dashboard (phone, walk-in)."""

    restaurant_id = IntegerField('Restaurant', validators=[InputRequired()])

    date = StringField('Date', validators=[DataRequired()])

    time = StringField('Heure', validators=[DataRequired()])

    guests = IntegerField('Personnes', validators=[
        DataRequired(),
        NumberRange(min=1, max=500, message='Nombre de personnes invalide')
    ])

    children = IntegerField('Enfants', default=0, validators=[Optional(), NumberRange(min=0)])

    first_name = StringField('Prénom', validators=[DataRequired(), Length(max=100)])

    last_name = StringField('Nom', validators=[DataRequired(), Length(max=100)])

    email = StringField('Email', validators=[Optional(), Length(max=200)])

    phone = StringField('Téléphone', validators=[Optional(), Length(max=50)])

    special_request = StringField('Demande spéciale', validators=[Optional(), Length(max=1000)])

    status = StringField('Statut', validators=[Optional()])

    table_id = StringField('Table', validators=[Optional()])

    zone_id = StringField('Zone', validators=[Optional()])
