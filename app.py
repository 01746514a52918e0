import logging
import os
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from config import config_dict
from commands import register_commands
from models import db
from routes.authentication import auth_bp
from routes.students import student_bp
from routes.tutors import tutor_bp
from routes.syllabus import syllabus_bp
from routes.enrollments import enrollment_bp
from utils.errors import register_error_handlers

migrate = Migrate()


def create_app(config_name=None, **overrides):
    env = config_name or os.environ.get("FLASK_ENV", "production")

    app = Flask(__name__)
    app.config.from_object(config_dict.get(env, config_dict["production"]))
    app.config.update(overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    logging.getLogger(__name__).info("Environment: %s", env)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(student_bp, url_prefix='/api/student')
    app.register_blueprint(tutor_bp, url_prefix='/api/tutor')
    app.register_blueprint(syllabus_bp, url_prefix='/api/courses')
    app.register_blueprint(enrollment_bp, url_prefix='/api')

    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        return jsonify({"success": True, "data": {"message": "Welcome to the LMS App!"}})

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'])
