import logging

from flask import Flask
from flask_cors import CORS

from .config import Config
from .routes import register_routes
from .extensions import db, jwt, migrate


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["ALLOWED_ORIGINS"]}},
        supports_credentials=True,
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"]
    )
    config_object.init_cloudinary()
    register_routes(app)

    with app.app_context():
        from student_hub.models import user, activity
        db.create_all()

    from student_hub.controller.student_controller import student_bp
    app.register_blueprint(student_bp)

    from student_hub.controller.faculty_controller import faculty_bp
    app.register_blueprint(faculty_bp)

    from student_hub.controller.admin_controller import admin_bp
    app.register_blueprint(admin_bp)

    from student_hub.controller.file_controller import file_bp
    app.register_blueprint(file_bp)

    from student_hub.commands import create_admin_command
    app.cli.add_command(create_admin_command)

    return app
