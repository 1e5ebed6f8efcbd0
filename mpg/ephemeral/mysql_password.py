"""
Ephemeral ``mysql_password`` resource.

Generates a random MySQL password that is never written to Terraform state.
"""

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, StrictInt, ValidationError

from mpg.core.config import settings
from mpg.core.diagnostics import Diagnostics, error_to_diagnostic
from mpg.core.exceptions import InvalidLengthError, RandomnessUnavailableError
from mpg.utils.passwords import MIN_PASSWORD_LENGTH, generate_password, validate_password
from mpg.utils.randomness import SECURE_SOURCE, RandomSource, get_shuffle_source

logger = logging.getLogger(__name__)

TYPE_NAME_SUFFIX = "_mysql_password"

# `length` is declared as an int32 attribute
MAX_INT32 = 2**31 - 1


class MySQLPasswordModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    length: Annotated[StrictInt, Field(le=MAX_INT32)] | None = None
    password: SecretStr | None = None


@dataclass
class OpenResponse:
    result: MySQLPasswordModel | None = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


class MySQLPasswordResource:
    """Ephemeral resource that opens to a freshly generated MySQL password."""

    def __init__(
        self,
        source: RandomSource | None = None,
        shuffle_source: RandomSource | None = None,
        default_length: int | None = None,
        max_first_char_redraws: int | None = None,
    ):
        self.source = source or SECURE_SOURCE
        self.shuffle_source = shuffle_source or get_shuffle_source(settings.SECURE_SHUFFLE)
        self.default_length = default_length if default_length is not None else settings.DEFAULT_PASSWORD_LENGTH
        self.max_first_char_redraws = (
            max_first_char_redraws if max_first_char_redraws is not None else settings.FIRST_CHAR_REDRAW_LIMIT
        )

    @staticmethod
    def metadata(provider_type_name: str) -> str:
        """Return the resource type name, e.g. ``mittwald_mysql_password`` for the ``mittwald`` provider."""
        return provider_type_name + TYPE_NAME_SUFFIX

    @staticmethod
    def schema() -> dict[str, Any]:
        return {
            "markdown_description": "Generate a random MySQL password compliant with the MySQL password policy.",
            "attributes": {
                "length": {
                    "type": "int32",
                    "description": "The desired length of the password. The default is 16.",
                    "optional": True,
                },
                "password": {
                    "type": "string",
                    "description": "The generated password.",
                    "computed": True,
                    "sensitive": True,
                },
            },
        }

    def open(self, config: dict[str, Any]) -> OpenResponse:
        """
        Generate a password for the given resource configuration.

        Args:
            config: Raw configuration values, ``length`` may be missing or None

        Returns:
            OpenResponse with the populated model, or with error diagnostics and no result
        """
        response = OpenResponse()

        try:
            model = MySQLPasswordModel.model_validate(config)
        except ValidationError as e:
            for error in e.errors():
                attribute = ".".join(str(part) for part in error["loc"]) or None
                if attribute:
                    response.diagnostics.add_attribute_error(attribute, "Invalid configuration", error["msg"])
                else:
                    response.diagnostics.add_error("Invalid configuration", error["msg"])
            return response

        length = model.length if model.length is not None else self.default_length
        logger.info(f"Generating MySQL password of length {length}")

        try:
            password = generate_password(
                length,
                source=self.source,
                shuffle_source=self.shuffle_source,
                max_first_char_redraws=self.max_first_char_redraws,
            )
        except InvalidLengthError as e:
            logger.warning(f"Rejected MySQL password length {length}, minimum is {MIN_PASSWORD_LENGTH}")
            response.diagnostics.add_attribute_error("length", "Invalid password length", str(e))
            return response
        except RandomnessUnavailableError as e:
            logger.error(f"Failed to generate MySQL password: {e}")
            error_to_diagnostic(response.diagnostics, "Error while generating password", e)
            return response

        violations = validate_password(password)
        if violations:
            logger.error(f"Generated password violates the password policy: {violations}")
            response.diagnostics.add_error("Error while generating password", "; ".join(violations))
            return response

        model.length = length
        model.password = SecretStr(password)
        response.result = model
        return response
