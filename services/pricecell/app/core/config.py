from pydantic_settings import BaseSettings, SettingsConfigDict  # per Pydantic v2


class Settings(BaseSettings):
    # Config Pydantic Settings v2
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignora eventuali env "in più"
    )

    # Indirizzo/porta di ascolto (default storico: 127.0.0.1:3000)
    HOST: str = "127.0.0.1"
    PORT: int = 3000

    # Livello del root logger (DEBUG mostra anche le letture del prezzo)
    LOG_LEVEL: str = "INFO"

    # Ambiente logico del servizio: dev / test / prod (solo etichetta nei log)
    ENVIRONMENT: str = "dev"

    # Alias "comodi" in lower-case, usati da main.py
    @property
    def host(self) -> str:
        return self.HOST

    @property
    def port(self) -> int:
        return self.PORT

    @property
    def log_level(self) -> str:
        """Livello normalizzato in maiuscolo, come lo vuole logging."""
        return self.LOG_LEVEL.upper()

    @property
    def environment(self) -> str:
        return self.ENVIRONMENT


settings = Settings()
