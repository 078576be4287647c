from flask import Flask
from config import Config
from extensions import db

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # init extentions
    db.init_app(app)

    # import and register blueprints
    from routes import main_bp
    from routes.debug import debug_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(debug_bp)

    return app

app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
