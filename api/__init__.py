from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from auth import AuthSettings, build_auth_service
from .config import get_config
from .errors import register_error_handlers
from models import storage  # DBStorage singleton (scoped_session)

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Tenant Auth API",
        "version": "1.0.0",
        "description": "User authentication with rotating refresh tokens, plus tenant and plan management.",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
      - selects the config class (APP_ENV or config_name)
      - binds the shared DBStorage to DATABASE_URL
      - builds the auth components once from an AuthSettings snapshot
    """
    app = Flask(__name__)

    app.config.from_object(get_config(config_name))

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    register_error_handlers(app)

    storage.configure(app.config["DATABASE_URL"], echo=app.config.get("SQLALCHEMY_ECHO", False))
    storage.reload()

    settings = AuthSettings.from_config(app.config)
    auth_service, codec = build_auth_service(storage, settings)
    app.extensions["auth_settings"] = settings
    app.extensions["auth_service"] = auth_service
    app.extensions["access_token_codec"] = codec
    app.extensions["credential_store"] = storage

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .tenants import bp as tenants_bp
    from .plans import bp as plans_bp
    from .seed import register_commands

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(tenants_bp, url_prefix="/api")
    app.register_blueprint(plans_bp, url_prefix="/api")
    register_commands(app)

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Tenant Auth API",
            "docs": "/apidocs/",
            "health": "/api/health",
        }, 200

    return app
