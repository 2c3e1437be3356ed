"""English messages (default locale)."""


def _join(values) -> str:
    return ", ".join(str(v) for v in values or ())


ENGLISH = {
    "invalid_type": lambda p: f"Expected {p.get('expected')}, got {p.get('received')}",
    "invalid_coercion": lambda p: f"Cannot convert to {p.get('type')}",
    "too_short": lambda p: f"Must be at least {p.get('min')} characters",
    "too_long": lambda p: f"Must be at most {p.get('max')} characters",
    "too_small": lambda p: f"Must be >= {p.get('min')}",
    "too_big": lambda p: f"Must be <= {p.get('max')}",
    "not_positive": lambda p: "Must be a positive number",
    "not_negative": lambda p: "Must be a negative number",
    "not_finite": lambda p: "Must be a finite number",
    "not_multiple_of": lambda p: f"Must be a multiple of {p.get('multiple_of')}",
    "invalid_email": lambda p: "Invalid email format",
    "invalid_url": lambda p: "Invalid URL format",
    "invalid_uuid": lambda p: "Invalid UUID format",
    "invalid_enum": lambda p: f"Must be one of: {_join(p.get('allowed'))}",
    "invalid_format": lambda p: "Invalid format",
    "invalid_literal": lambda p: f"Expected literal value {p.get('expected')!r}, got {p.get('received')!r}",
    "invalid_union": lambda p: "Value does not match any member of the union",
    "invalid_date": lambda p: "Expected a datetime, ISO 8601 string or timestamp",
    "date_too_early": lambda p: f"Date must be after {p.get('min')}",
    "date_too_late": lambda p: f"Date must be before {p.get('max')}",
    "unknown_key": lambda p: f"Unknown key: {p.get('key')}",
    "required": lambda p: "This field is required",
    "transform_error": lambda p: (
        f"Transform failed: {p['error']}" if p.get("error") else "Failed to construct object"
    ),
    "preprocess_error": lambda p: f"Preprocessing failed: {p.get('error')}",
    "custom_error": lambda p: p.get("message") or "Validation failed",
    "custom_validation_failed": lambda p: p.get("message") or "Custom validation failed",
    "async_refinement_error": lambda p: f"Async validation failed: {p.get('error')}",
    "async_custom_error": lambda p: p.get("message") or "Async validation failed",
}
