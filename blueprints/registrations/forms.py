"""
Restaurant registration forms.
Cuisine types and photo lists are JSON arrays and are read from the payload directly.
"""

from wtforms import StringField
from wtforms.validators import DataRequired, Length, Optional

from blueprints.auth.forms import ApiForm, RegisterForm


class RestaurantRegistrationForm(ApiForm):
    """Restaurant details submitted by a restaurateur."""

    restaurant_name = StringField('Nom du restaurant', validators=[DataRequired(), Length(max=200)])

    address = StringField('Adresse', validators=[DataRequired(), Length(max=255)])

    phone = StringField('Téléphone', validators=[DataRequired(), Length(max=50)])

    company_name = StringField('Raison sociale', validators=[Optional(), Length(max=200)])

    registration_number = StringField('Numéro IDE', validators=[Optional(), Length(max=100)])

    postal_code = StringField('NPA', validators=[Optional(), Length(max=20)])

    city = StringField('Ville', validators=[Optional(), Length(max=100)])

    price_range = StringField('Gamme de prix', validators=[DataRequired(), Length(max=10)])

    description = StringField('Description', validators=[Optional(), Length(max=5000)])

    logo_url = StringField('Logo', validators=[Optional(), Length(max=500)])

    menu_pdf_url = StringField('Menu PDF', validators=[Optional(), Length(max=500)])


class RegistrationWithAccountForm(RegisterForm, RestaurantRegistrationForm):
    """Account and restaurant created in one step."""

    company_name = StringField('Raison sociale', validators=[DataRequired(), Length(max=200)])
