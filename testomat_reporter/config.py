"""Configuration for the Testomat.io reporter."""

from collections.abc import Mapping

from pydantic import BaseModel, SecretStr

API_KEY_ENV = "TESTOMATIO"
BASE_URL_ENV = "TESTOMATIO_URL"
DEFAULT_BASE_URL = "https://app.testomat.io/api/reporter"


class ReporterConfig(BaseModel):
    """Configuration for the reporter API client.

    The API key is a product key (``tstmt_...``) tied to one Testomat.io
    project. It is sent as a query parameter and must never be logged.
    """

    api_key: SecretStr = SecretStr("")
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 10.0
    file_extension: str = ".py"

    @classmethod
    def from_env(cls, environ: Mapping[str, str], **overrides: object) -> "ReporterConfig":
        """Build configuration from environment variables.

        A missing key is not rejected here; the controller refuses to create a
        run without one.
        """
        values: dict[str, object] = {
            "api_key": SecretStr(environ.get(API_KEY_ENV, "")),
        }
        if base_url := environ.get(BASE_URL_ENV):
            values["base_url"] = base_url
        values.update(overrides)
        return cls.model_validate(values)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty API key is configured."""
        return bool(self.api_key.get_secret_value().strip())
