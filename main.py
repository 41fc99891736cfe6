import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from servio.application.events import EventBus
from servio.application.use_cases import OrderNotificationService
from servio.application.use_cases.notifications import NotificationService
from servio.config import get_settings
from servio.infrastructure.database import (
    build_session_factory,
    engine as default_engine,
    initialize_database,
)
from servio.infrastructure.email import send_email
from servio.infrastructure.notifications import ConnectionManager, NotificationDispatcher
from servio.infrastructure.repositories import NotificationStore
from servio.infrastructure.sms import send_sms
from servio.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the engine on shutdown."""

    initialize_database(app.state.engine)
    yield
    if app.state.engine is default_engine:
        default_engine.dispose()


def create_app(bind: Engine | None = None, *, sms_sender=send_sms, email_sender=send_email) -> FastAPI:
    """Build the FastAPI application and wire the notification pipeline."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Servio Notifications", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    engine = bind or default_engine
    session_factory = build_session_factory(engine)
    bus = EventBus()
    dispatcher = NotificationDispatcher(ConnectionManager())
    order_messaging = OrderNotificationService(
        session_factory, sms_sender=sms_sender, email_sender=email_sender
    )

    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.event_bus = bus
    app.state.dispatcher = dispatcher
    app.state.notification_service = NotificationService(
        bus, NotificationStore(session_factory), dispatcher, order_messaging
    )

    register_routes(app)
    return app


app = create_app()
