from decouple import config as env_config


class ConfigurationError(RuntimeError):
    """Raised when the settings needed to reach MongoDB are missing."""


class Config:
    ENVIRONMENT = env_config("ENVIRONMENT", default="dev")

    # Database URIs
    PROD_URI = env_config("PROD_MONGO_URI", default=None)
    DEV_URI = env_config("DEV_MONGO_URI", default=None)

    MONGO_TLS_ALLOW_INVALID = env_config("MONGO_TLS_ALLOW_INVALID", default=False, cast=bool)

    @classmethod
    def get_current_uri(cls):
        uri = cls.DEV_URI if cls.ENVIRONMENT == "dev" else cls.PROD_URI
        if not uri:
            name = "DEV_MONGO_URI" if cls.ENVIRONMENT == "dev" else "PROD_MONGO_URI"
            raise ConfigurationError(f"{name} is not set for ENVIRONMENT={cls.ENVIRONMENT!r}")
        return uri
