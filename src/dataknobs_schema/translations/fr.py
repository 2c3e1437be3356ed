"""French messages."""


def _join(values) -> str:
    return ", ".join(str(v) for v in values or ())


FRENCH = {
    "invalid_type": lambda p: f"Attendu {p.get('expected')}, reçu {p.get('received')}",
    "invalid_coercion": lambda p: f"Impossible de convertir en {p.get('type')}",
    "too_short": lambda p: f"Doit contenir au moins {p.get('min')} caractères",
    "too_long": lambda p: f"Doit contenir au maximum {p.get('max')} caractères",
    "too_small": lambda p: f"Doit être >= {p.get('min')}",
    "too_big": lambda p: f"Doit être <= {p.get('max')}",
    "not_positive": lambda p: "Doit être un nombre positif",
    "not_negative": lambda p: "Doit être un nombre négatif",
    "not_finite": lambda p: "Doit être un nombre fini",
    "not_multiple_of": lambda p: f"Doit être un multiple de {p.get('multiple_of')}",
    "invalid_email": lambda p: "Format d'email invalide",
    "invalid_url": lambda p: "Format d'URL invalide",
    "invalid_uuid": lambda p: "Format d'UUID invalide",
    "invalid_enum": lambda p: f"Doit être l'un de: {_join(p.get('allowed'))}",
    "invalid_format": lambda p: "Format invalide",
    "invalid_literal": lambda p: (
        f"Valeur littérale attendue: {p.get('expected')!r}, reçu: {p.get('received')!r}"
    ),
    "invalid_union": lambda p: "La valeur ne correspond à aucun membre de l'union",
    "invalid_date": lambda p: "Date/heure attendue, chaîne ISO 8601 ou horodatage",
    "date_too_early": lambda p: f"La date doit être postérieure à {p.get('min')}",
    "date_too_late": lambda p: f"La date doit être antérieure à {p.get('max')}",
    "required": lambda p: "Ce champ est requis",
    "transform_error": lambda p: "Échec de la construction de l'objet",
    "custom_error": lambda p: p.get("message") or "Validation échouée",
    "custom_validation_failed": lambda p: (
        p.get("message") or "La validation personnalisée a échoué."
    ),
    "async_custom_error": lambda p: p.get("message") or "La validation asynchrone a échoué",
}
