import atexit
import logging
import os

from blueprints.auth import auth_bp
from blueprints.companies import companies_bp
from blueprints.jobs import jobs_bp
from blueprints.users import users_bp
from config import Config
from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from shared import PostgreSQLDatabase
from utils.services import DATABASE_EXTENSION, build_database_config

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(config_object=Config, database=None):
    """Application factory function.

    Args:
        config_object: Flask configuration object
        database: Database to serve requests from. A PostgreSQLDatabase built
            from the environment is used when omitted.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    # Initialize JWT
    jwt = JWTManager(app)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"msg": "Token has expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        logger.error(f"Invalid token error: {str(error)}")
        return jsonify({"msg": f"Invalid token: {str(error)}"}), 422

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({"msg": "Missing authorization header"}), 401

    # Initialize CORS
    CORS(
        app,
        origins=app.config["CORS_ORIGINS"],
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
    )

    # Register Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(companies_bp)
    app.register_blueprint(jobs_bp)
    app.register_blueprint(users_bp)

    if database is None:
        database = PostgreSQLDatabase(build_database_config())
        # Close the connection pool on process exit for graceful cleanup
        atexit.register(database.close)
    app.extensions[DATABASE_EXTENSION] = database

    return app


app = create_app()

if __name__ == "__main__":
    debug = os.getenv("ENVIRONMENT", "development") == "development"
    app.run(host="0.0.0.0", port=5000, debug=debug, use_reloader=debug)
