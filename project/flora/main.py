# flora/main.py

from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flora.config import Settings, settings
from flora.services.store import OrderStore, SqlOrderStore
from flora.utils.database import build_engine, build_session_factory, init_db
from flora.utils.log import Log

# --- загрузка переменных окружения ---
load_dotenv()


def create_app(app_settings: Settings | None = None, store: OrderStore | None = None) -> FastAPI:
    """
    Собирает приложение. Хранилище можно передать готовым,
    иначе в lifespan создаётся SqlOrderStore по DATABASE_URL.
    """
    app_settings = app_settings or settings

    # --- sync логгер для раннего старта ---
    boot_log = Log(app_settings.LOG_DIR, app_settings.LOG_PRINT)
    boot_log.log_info_sync(target="startup", message="Сборка приложения")

    # ────────────── Lifespan ──────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

        engine = None
        if store is None:
            engine = build_engine(app_settings.DATABASE_URL, app_settings.DATABASE_ECHO)
            await init_db(engine)
            app.state.store = SqlOrderStore(build_session_factory(engine))
            boot_log.log_info_sync(target="startup", message="База инициализирована")
        else:
            app.state.store = store

        app.state.log = Log(app_settings.LOG_DIR, app_settings.LOG_PRINT)
        await app.state.log.log_info(target="startup", message="Async Log инициализирован", data={
            "store": type(app.state.store).__name__,
        })

        yield

        # shutdown
        await app.state.log.log_info(target="shutdown", message="Остановка приложения")
        await app.state.log.shutdown()
        if engine is not None:
            await engine.dispose()
        boot_log.log_info_sync(target="shutdown", message="Log корректно завершён")

    app = FastAPI(title=app_settings.APP_TITLE, lifespan=lifespan)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def read_root():
        return {"message": "Studio Flora order intake", "docs": "/docs"}

    # ────────────── Подключение роутов ──────────────
    from flora.routes import order

    app.include_router(order.router, prefix="/api/orders", tags=["order"])

    return app


# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    uvicorn.run(
        "flora.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=8000,
        log_level="info",
        reload=True
    )
