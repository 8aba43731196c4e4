# webapp/__init__.py
import time
from uuid import uuid4

from flask import Flask, g, request

from .extensions import db, migrate, api as smorest_api
from .logging_utils import prepare_log_payload, scrub_for_logging
from core.logging_config import ensure_console_logging
from core.time import utc_now_isoformat


def create_app(config_object=None):
    """アプリケーションファクトリ"""
    from dotenv import load_dotenv
    from .config import Config

    # .env を読み込む（環境変数が未設定の場合のみ）
    load_dotenv()

    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    # 拡張初期化
    db.init_app(app)
    migrate.init_app(app, db)
    smorest_api.init_app(app)

    ensure_console_logging(app.logger, app.config.get("LOG_LEVEL"))

    # モデル import（migrate 用に認識させる）
    from core.models import user as _user  # noqa: F401
    from core.models import client as _client  # noqa: F401

    # Blueprint 登録
    from .api import bp as api_bp
    smorest_api.register_blueprint(api_bp, url_prefix="/api")

    # 認証なしの健康チェック用Blueprint
    from .health import health_bp
    app.register_blueprint(health_bp)

    # smorest 既定のハンドラより後に登録して JSON 形式を統一
    from .error_handlers import register_error_handlers
    register_error_handlers(app)

    from .services.registration_service import init_registration_service
    init_registration_service(app)

    # CLI コマンド登録
    register_cli_commands(app)

    @app.before_request
    def start_timer():
        g.start_time = time.perf_counter()

    @app.before_request
    def log_api_request():
        if request.path.startswith("/api"):
            req_id = str(uuid4())
            g.request_id = req_id
            # Inputログ
            input_json = request.get_json(silent=True)

            log_dict = {
                "method": request.method,
            }
            args_dict = request.args.to_dict()
            if args_dict:
                log_dict["args"] = scrub_for_logging(args_dict)
            if input_json is not None:
                log_dict["json"] = scrub_for_logging(input_json)
            app.logger.info(
                prepare_log_payload(log_dict),
                extra={
                    "event": "api.input",
                    "request_id": req_id,
                    "path": request.path,
                }
            )

    @app.after_request
    def log_api_response(response):
        if request.path.startswith("/api"):
            resp_json = None
            if response.mimetype == "application/json" and not response.direct_passthrough:
                resp_json = response.get_json(silent=True)
            base_payload = {
                "status": response.status_code,
                "json": scrub_for_logging(resp_json) if resp_json is not None else None,
            }
            log_extra = {
                "event": "api.output",
                "request_id": getattr(g, "request_id", None),
                "path": request.path,
            }
            if response.status_code >= 400:
                app.logger.warning(prepare_log_payload(base_payload), extra=log_extra)
            else:
                app.logger.info(prepare_log_payload(base_payload), extra=log_extra)
        return response

    @app.after_request
    def add_server_timing(response):
        start = getattr(g, "start_time", None)
        if start is not None:
            duration = (time.perf_counter() - start) * 1000
            response.headers["Server-Timing"] = f"app;dur={duration:.2f}"
        response.headers["X-Server-Time"] = utc_now_isoformat()
        return response

    return app


DEFAULT_ROLES = [
    {"id": 1, "name": "Administrador"},
    {"id": 2, "name": "Cliente"},
    {"id": 3, "name": "Empleado"},
]


def seed_roles(force: bool = False) -> list:
    """ロールマスタデータの投入。追加したロール名を返す。"""
    from core.models.user import Role

    added = []
    for role_data in DEFAULT_ROLES:
        existing_role = db.session.get(Role, role_data["id"])
        if existing_role is None:
            db.session.add(Role(**role_data))
            added.append(role_data["name"])
        elif force:
            existing_role.name = role_data["name"]
    return added


def register_cli_commands(app):
    """CLI コマンドを登録"""
    import click

    @app.cli.command("seed-roles")
    @click.option('--force', is_flag=True, help='既存ロールの名称も上書きする')
    def seed_roles_command(force):
        """ロールマスタデータを投入"""
        try:
            added = seed_roles(force=force)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            click.echo(f"Seeding failed: {e}", err=True)
            raise click.ClickException(str(e))

        for name in added:
            click.echo(f"Added role: {name}")
        if not added:
            click.echo("Roles already exist.")
