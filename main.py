from cafe.api.admin.users import admin_users_bp
from cafe.api.communication.notifications import notifications_bp
from cafe.api.menu.items import menu_bp
from cafe.api.orders.orders import orders_bp
from cafe.api.reservations.reservations import reservations_bp
from cafe.routes.auth import auth_bp
from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
from flasgger import Swagger
from swagger__config import SWAGGER_CONFIG, SWAGGER_TEMPLATE
import os

load_dotenv()
from cafe.config import Config  # noqa: E402
from cafe.extensions import db  # noqa: E402
from cafe.models import Base  # noqa: E402
from cafe.seed import seed_all  # noqa: E402


def create_app(config_object=Config):
    print("Starting create_app()")
    app = Flask(__name__)
    try:
        print("Loading config...")
        app.config.from_object(config_object)
        print(f"Config loaded: {len(app.config)} items")

        CORS(app)
        print("CORS initialized")

        db.init_app(app)
        print("Database initialized")

        host = os.environ.get("API_HOST", "127.0.0.1:5000")
        swagger_template = SWAGGER_TEMPLATE.copy()
        swagger_template["host"] = host
        Swagger(app, config=SWAGGER_CONFIG, template=swagger_template)
        print("Swagger initialized - Access at /api/docs")

        print("Registering blueprints...")
        blueprints = [
            auth_bp,
            menu_bp,
            orders_bp,
            reservations_bp,
            notifications_bp,
            admin_users_bp,
        ]
        for bp in blueprints:
            app.register_blueprint(bp)
            print(f"  ✓ {bp.name} registered")

        if os.environ.get("SEED_ON_START") == "True":
            with app.app_context():
                Base.metadata.create_all(db.engine)
                seed_all(db.session)

        @app.route("/")
        def home():
            """
            Root endpoint - API status
            ---
            tags:
              - Utility
            responses:
              200:
                description: API is running
            """
            return {"status": "ok", "message": "Backend is running!"}, 200

        print(f"Total routes registered: {len(list(app.url_map.iter_rules()))}")

    except Exception as e:
        print(f"Error during app creation: {e}")
        import traceback

        print(f"Full traceback: {traceback.format_exc()}")
        raise

    print("create_app() completed successfully")
    return app


if __name__ == "__main__":
    # .env needs DATABASE_URL, e.g. mysql://<USER>:<PASSWORD>@<HOST>:<PORT>/cafe
    # or FLASK_ENV=development for a local SQLite file
    app = create_app()
    port = int(os.environ.get("PORT", 5000))
    app.run(
        host="0.0.0.0", port=port, debug=os.environ.get("FLASK_ENV") != "production"
    )
