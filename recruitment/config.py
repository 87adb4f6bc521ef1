from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://careers.example.ac,https://hr.example.ac"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Institution details used in job postings and email templates
    institution_name: str = "LUANAR"
    default_job_location: str = "Lilongwe, Malawi"
    hr_signature_name: str = "HR Office"
    hr_signature_title: str = "Human Resources Management"
    hr_signature_address: str = ""
    hr_signature_phone: str = ""
    hr_signature_email: str = ""
    hr_signature_motto: str = "Hire to get RESULTS not REASONS"

    # SMTP delivery for applicant status emails
    email_enabled: bool = True
    smtp_host: str = "smtp.office365.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout_seconds: int = 30
    smtp_max_connections: int = 3
    mail_from_name: str = "HR Office"
    mail_from_address: str = "hr@example.com"

    # Uploaded documents are written here and served under upload_url_prefix
    upload_dir: str = "public/uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_mb: int = 10
    allowed_upload_extensions: str = ".pdf,.doc,.docx,.jpg,.jpeg,.png"

    # Application pipeline: when on, reject status moves the HR dashboard would not offer
    enforce_status_transitions: bool = False

    # Request guards
    rate_limit_auth_per_min: int = 20
    rate_limit_upload_per_min: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
