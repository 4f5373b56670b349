"""
Centralized French UI messages.
All user-facing text in French for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Bienvenue {name}',
    'logout_success': 'Déconnexion réussie',
    'register_success': 'Compte créé avec succès',
    'booking_created': 'Réservation envoyée',
    'booking_updated': 'Réservation mise à jour',
    'booking_cancelled': 'Votre réservation a été annulée',
    'restaurant_created': 'Restaurant créé',
    'restaurant_updated': 'Restaurant mis à jour',
    'restaurant_deleted': 'Restaurant supprimé',
    'restaurant_claimed': 'Restaurant revendiqué',
    'closed_day_created': 'Jour de fermeture ajouté',
    'closed_day_deleted': 'Jour de fermeture supprimé',
    'floor_plan_saved': 'Plan de salle enregistré',
    'client_updated': 'Client mis à jour',
    'team_member_added': 'Membre ajouté',
    'team_member_removed': 'Utilisateur retiré',
    'user_created': 'Utilisateur créé',
    'user_updated': 'Utilisateur mis à jour',
    'user_deleted': 'Utilisateur supprimé',
    'password_updated': 'Mot de passe mis à jour',
    'registration_received': 'Demande d\'inscription enregistrée',
    'registration_updated': 'Demande d\'inscription mise à jour',
    'notifications_read': 'Notifications marquées comme lues',

    # Auth errors
    'unauthorized': 'Non autorisé',
    'admin_required': 'Accès administrateur requis',
    'invalid_credentials': 'Email ou mot de passe incorrect',
    'email_exists': 'Un compte avec cet email existe déjà',
    'user_exists': 'L\'utilisateur existe déjà',
    'user_not_found': 'Utilisateur introuvable',
    'cannot_delete_self': 'Vous ne pouvez pas supprimer votre propre compte',
    'invalid_email': 'Format email invalide',
    'too_many_attempts': 'Trop de tentatives, veuillez réessayer plus tard.',
    'csrf_failed': 'Jeton de sécurité invalide ou expiré',

    # Restaurant errors
    'restaurant_not_found': 'Restaurant introuvable',
    'restaurant_forbidden': 'Non autorisé pour ce restaurant',
    'restaurant_already_claimed': 'Restaurant déjà revendiqué',
    'no_valid_fields': 'Aucun champ valide à mettre à jour',
    'missing_registration_info': 'Informations requises manquantes',
    'invalid_approval_status': 'Statut invalide',
    'registration_not_found': 'Demande d\'inscription introuvable',

    # Booking errors
    'booking_not_found': 'Réservation introuvable',
    'invalid_status': 'Statut invalide',
    'date_closed': 'Les réservations ne sont pas disponibles pour cette date.',
    'date_closed_owner': 'Les réservations sont fermées pour cette date.',
    'service_closed': 'Les réservations ne sont pas disponibles pour ce service.',
    'restaurant_closed_day': 'Le restaurant est fermé ce jour-là.',
    'outside_opening_hours': 'L\'heure de réservation est en dehors des horaires d\'ouverture.',
    'date_in_past': 'La date de réservation est déjà passée.',
    'guests_out_of_range': 'Le nombre de personnes doit être compris entre {min} et {max}.',
    'device_email_mismatch': (
        'Cet appareil est déjà associé à un autre compte email. '
        'Veuillez utiliser la même adresse email pour toutes vos réservations.'
    ),
    'duplicate_slot_booking': (
        'Vous avez déjà une réservation sur ce créneau horaire. '
        'Veuillez choisir un autre horaire.'
    ),
    'owner_booking_missing_fields': (
        'Champs requis manquants: restaurant_id, date, time, guests, first_name, last_name'
    ),
    'invalid_bill_amount': 'Montant de l\'addition invalide',
    'table_not_in_floor_plan': 'Cette table n\'existe pas dans le plan de salle',
    'invalid_action': 'Action invalide',
    'invalid_signature': 'Lien invalide ou expiré',
    'booking_already_cancelled': 'Cette réservation est déjà annulée',

    # Client errors
    'client_not_found': 'Client introuvable',
    'client_without_restaurant': 'Client sans restaurant associé',

    # Closed days / floor plans / team
    'date_required': 'La date est requise',
    'invalid_date': 'Format de date invalide (AAAA-MM-JJ)',
    'invalid_month': 'Format de mois invalide (AAAA-MM)',
    'invalid_service': 'Service invalide',
    'closed_day_not_found': 'Jour de fermeture introuvable',
    'closed_day_exists': 'Ce jour est déjà fermé pour ce service',
    'invalid_floor_plan': 'Plan de salle invalide',
    'team_email_required': 'L\'email est requis',
    'team_password_required': 'Le mot de passe est requis',
    'team_member_exists': 'L\'utilisateur a déjà accès à ce restaurant',
    'team_member_not_found': 'Membre introuvable',

    # Upload errors
    'no_file': 'Aucun fichier fourni',
    'invalid_file_type': 'Type de fichier non autorisé',
    'file_too_large': 'Le fichier est trop volumineux',

    # Google Places
    'places_not_configured': 'Google Places API non configurée',
    'places_query_required': 'Le paramètre \'q\' est requis',
    'place_not_found': 'Lieu introuvable',
    'places_unavailable': 'Service Google Places indisponible',

    # Generic
    'invalid_id': 'Identifiant invalide',
    'not_found': 'Ressource introuvable',
    'method_not_allowed': 'Méthode non autorisée',
    'server_error': 'Erreur serveur',
    'invalid_request': 'Requête invalide',

    # Booking status labels
    'status_pending': 'En attente de confirmation',
    'status_confirmed': 'Confirmée',
    'status_waiting': 'Liste d\'attente',
    'status_refused': 'Refusée',
    'status_cancelled': 'Annulée',
    'status_noshow': 'Absent',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
