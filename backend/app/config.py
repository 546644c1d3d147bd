from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_username: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "courier_track"
    database_url: str | None = None

    jwt_secret: str = "dev-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    bcrypt_rounds: int = 10

    # Tracking numbers: <prefix><epoch ms><0-999>
    consignee_number_prefix: str = "CN"
    consignee_number_max_attempts: int = 5

    default_page_size: int = 10
    max_page_size: int = 100

    seed_admin_email: str = "admin@couriertrack.com"
    seed_admin_password: str = "admin123"
    seed_admin_name: str = "System Admin"

    port: int = 8000
    env: str = "development"
    frontend_url: str = "http://localhost:3000"

    model_config = {"env_file": ".env", "extra": "ignore", "env_file_encoding": "utf-8"}

    def get_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.db_username}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


settings = Settings()
