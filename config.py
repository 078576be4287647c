import os


# Absolute path to project root
# (a stable anchor for all file paths)
basedir = os.path.abspath(os.path.dirname(__file__))

# Runtime only directory (DB, reports)
instance_dir = os.path.join(basedir, "instance")

class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///" + os.path.join(instance_dir, "bulletin.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Course records extracted from the bulletin pages (*.json), one list of courses per file.
    CATALOG_DIR = os.path.join(basedir, "data_catalog")

    # Default output of scripts/requirements_report.py (.xlsx or .csv)
    REPORT_PATH = os.path.join(instance_dir, "requirements_report.xlsx")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
