from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from mangum import Mangum

from . import __version__, config
from .dynamo import EventStore
from .errors import register_error_handlers
from .routes import events, home


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Connect the store before serving and close it on the way out.

    Both ends are fatal: a table that cannot be reached stops startup, and a
    failed close propagates out of the server.
    """
    print("Starting the application...")
    if app.state.store is None:
        app.state.store = EventStore.from_config()
    app.state.store.connect()

    yield

    app.state.store.close()


def create_app(store: Optional[EventStore] = None) -> FastAPI:
    """
    Build the API around a store.

    Tests pass their own store; the default app builds one from config.
    """
    app = FastAPI(
        title="Events API",
        description="CRUD over events stored in DynamoDB",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store

    app.include_router(home.router)
    app.include_router(events.router)
    register_error_handlers(app)

    return app


app = create_app()

# Mangum handler for AWS Lambda. The store is built on first use (see
# context.get_store) rather than per invocation.
handler = Mangum(app, lifespan="off")


def run():
    print(f"Listening on http://{config.HOST}:{config.PORT}")
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level="info")


if __name__ == "__main__":
    run()
