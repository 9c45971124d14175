from marshmallow import ValidationError


def not_blank(max_length: int):
    """Validator: non-empty after strip and at most max_length characters."""
    def _validate(value: str) -> None:
        if not value.strip():
            raise ValidationError("Must not be blank.")
        if len(value) > max_length:
            raise ValidationError(f"Must be at most {max_length} characters.")
    return _validate
