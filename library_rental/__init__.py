from flask import Flask, jsonify
from library_rental.config import Config
from library_rental.extensions import db, migrate
from library_rental.db_objects import ensure_db_objects
from library_rental.errors import register_error_handlers

from library_rental.repositories.book_repo import BookRepo
from library_rental.repositories.rental_repo import RentalRepo
from library_rental.repositories.user_repo import UserRepo
from library_rental.services.book_service import BookService
from library_rental.services.rental_service import RentalLedger
from library_rental.services.report_service import RentalReports
from library_rental.services.user_service import UserService


def _engine_options(app):
    opts = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
    uri = app.config["SQLALCHEMY_DATABASE_URI"]
    if uri.startswith("sqlite"):
        # kilitli DB'de sonsuza kadar bekleme
        connect_args = dict(opts.get("connect_args") or {})
        connect_args.setdefault("timeout", app.config["STORE_TIMEOUT_SECONDS"])
        opts["connect_args"] = connect_args
    return opts


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(app)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # 1) Önce db init (db.engine / db.session için şart)
    db.init_app(app)

    # 2) Tablolar + open-rental unique index
    ensure_db_objects(app)

    # 3) Diğer extension'lar
    migrate.init_app(app, db)

    # 4) Servisler: store bağımlılıkları burada açıkça verilir
    books, users, rentals = BookRepo(), UserRepo(), RentalRepo()
    app.extensions["library_catalog"] = BookService(books, rentals)
    app.extensions["library_users"] = UserService(users)
    app.extensions["rental_ledger"] = RentalLedger(rentals, books, users)
    app.extensions["rental_reports"] = RentalReports(rentals, books, users)

    # 5) API blueprintleri
    from library_rental.controllers.book_controller import book_bp
    from library_rental.controllers.user_controller import user_bp
    from library_rental.controllers.rental_controller import rental_bp
    app.register_blueprint(book_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(rental_bp)

    register_error_handlers(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
