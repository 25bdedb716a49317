"""
Password policy validators.

Plugged into AUTH_PASSWORD_VALIDATORS next to Django's MinimumLengthValidator.
django.contrib.auth.password_validation.validate_password runs all of them and
collects every failure, so a weak password reports one reason per failing rule.

Policy:
    - at least 8 characters (MinimumLengthValidator)
    - at least one uppercase letter
    - at least one lowercase letter
    - at least one digit
"""

from django.core.exceptions import ValidationError


class _CharacterClassValidator:
    """Require at least one character for which `predicate` holds."""

    code = "password_character_class"
    message = ""
    help_message = ""

    def predicate(self, char: str) -> bool:
        raise NotImplementedError

    def validate(self, password, user=None):
        if not any(self.predicate(char) for char in password or ""):
            raise ValidationError(self.message, code=self.code)

    def get_help_text(self):
        return self.help_message


class UppercaseValidator(_CharacterClassValidator):
    code = "password_no_upper"
    message = "Password must contain at least one uppercase letter."
    help_message = "Your password must contain at least one uppercase letter."

    def predicate(self, char):
        return char.isupper()


class LowercaseValidator(_CharacterClassValidator):
    code = "password_no_lower"
    message = "Password must contain at least one lowercase letter."
    help_message = "Your password must contain at least one lowercase letter."

    def predicate(self, char):
        return char.islower()


class DigitValidator(_CharacterClassValidator):
    code = "password_no_digit"
    message = "Password must contain at least one digit."
    help_message = "Your password must contain at least one digit."

    def predicate(self, char):
        return char.isdigit()
