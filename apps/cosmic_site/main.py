import uvicorn
from cosmic_cms import create_app
from cosmic_core.config import cosmic_settings

app = create_app(cosmic_settings)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=cosmic_settings.is_development(),
        log_level=cosmic_settings.LOG_LEVEL.lower(),
    )
