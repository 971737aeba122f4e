from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Karage Integrations"
    version: str = "1.0.0"
    DEBUG: bool = False
    APP_DATABASE_DSN: str = "sqlite:////tmp/karage.db"
    REDIS_URL: str = "redis://localhost:6379"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Outbound HTTP
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Session validation against the POS identity API
    IDENTITY_API_URL: str = "https://identity.karage.co/api/session/validate"

    # Customer bearer tokens (base64-encoded HMAC secret)
    CUSTOMER_JWT_SECRET: str = ""
    CUSTOMER_JWT_ISSUER: str = "Karage"
    CUSTOMER_JWT_CLAIM: str = "customerID"

    # OTP
    API_SECRET_TOKEN: str = ""
    OTP_RATE_LIMIT_PER_MINUTE: int = 5

    # Unifonic SMS
    UNIFONIC_API_URL: str = "https://api.unifonic.com/rest/SMS/messages"
    APP_SID: str = ""
    UNIFONIC_USERNAME: str = ""
    UNIFONIC_PASSWORD: str = ""
    SMS_SENDER_ID: str = "Karage"

    # Tamara
    TAMARA_API_URL: str = "https://api-sandbox.tamara.co/"
    TAMARA_AUTH_TOKEN: str = ""
    TAMARA_NOTIFICATION_TOKEN: str = ""

    # LoyalPro
    LOYALPRO_API_URL: str = "https://loyapro.com/api2/garage/"
    LOYALPRO_AUTH_TOKEN: str = ""

    # Moyasar
    MOYASAR_WEBHOOK_SECRET: str = ""

    # Boukak
    BOUKAK_API_URL: str = "https://api.partners.boukak.com"
    BOUKAK_API_KEY: str = ""
    BOUKAK_DEFAULT_TEMPLATE_ID: str = "default-template-id"
    BOUKAK_BULK_TEMPLATE_ID: str = "0p7KrSlSVGdsmRlqV50z"
    BOUKAK_BULK_PLATFORM: str = "ios"
    BOUKAK_BULK_LANGUAGE: str = "ar"
    BOUKAK_BULK_LIMIT: int = 10

    # Sadeq e-signature
    SADQ_URL: str = ""
    SADQ_USERNAME: str = ""
    SADQ_PASSWORD: str = ""
    SADQ_ACCOUNT_ID: str = ""
    SADQ_ACCOUNT_SECRET: str = ""
    SADQ_REQUEST_USERNAME: str = ""
    SADQ_REQUEST_PASSWORD: str = ""
    SADQ_INVITATION_DAYS: int = 30

    # VOM
    VOM_API_URL: str = "https://nouravom.getvom.com"
    VOM_EMAIL: str = ""
    VOM_PASSWORD: str = ""
    VOM_TOKEN_TTL_SECONDS: int = 3600
    VOM_DEFAULT_CATEGORY_ID: int = 1
    VOM_DEFAULT_UNIT_ID: int = 4
    VOM_DEFAULT_WAREHOUSE_ID: int = 1
    VOM_ACCOUNT_RECEIVABLE_ID: int = 187


settings = Settings()
