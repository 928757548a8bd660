import argparse
import sys
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from scoping_core.api import user_router, question_set_router, outline_router, message_router
from scoping_core.api.auth import FirebaseTokenVerifier
from scoping_core.api.middleware import install_middleware, install_error_handlers
from scoping_core.completion import BaseCompletionClient, CompletionWorker, OpenAICompletionClient
from scoping_core.config import Settings
from scoping_core.datastore import Datastore, get_datastore
from scoping_core.logging_config import setup_logging, get_logger
from scoping_core.services import UserService, QuestionSetService, CourseOutlineService, MessageService

# Load environment variables
load_dotenv()


def resolve_api_key(settings: Settings) -> Optional[str]:
    """Use the configured API key, falling back to Secret Manager."""
    if settings.completion_api_key:
        return settings.completion_api_key

    from scoping_core.completion.secret_manager import get_secret

    api_key = get_secret(settings.project_id, settings.completion_secret_name, get_logger("secrets"))
    if not api_key:
        get_logger("app").error("Failed to get the completion API key")
    return api_key


def create_app(
    settings: Settings,
    datastore: Optional[Datastore] = None,
    completion_client: Optional[BaseCompletionClient] = None,
    token_verifier=None,
) -> FastAPI:
    """
    Wire repositories, services, the completion worker and routers into a FastAPI app.

    Collaborators default to the production implementations selected by `settings`.
    """
    setup_logging(settings.log_level)
    logger = get_logger("app")
    logger.debug(f"Settings: {settings.to_dict()}")

    if datastore is None:
        datastore = get_datastore(settings.datastore, settings, get_logger("datastore"))

    if completion_client is None:
        completion_client = OpenAICompletionClient(
            api_key=resolve_api_key(settings),
            api_url=settings.completion_api_url,
            model_id=settings.completion_model_id,
            temperature=settings.completion_temperature,
            timeout=settings.completion_timeout,
            logger=get_logger("completion"),
        )

    if token_verifier is None:
        token_verifier = FirebaseTokenVerifier(settings.project_id, get_logger("auth"))

    completion_worker = CompletionWorker(
        message_repository=datastore.messages,
        completion_client=completion_client,
        workers=settings.completion_workers,
        retry_attempts=settings.retry_attempts,
        retry_wait_min=settings.retry_wait_min,
        retry_wait_max=settings.retry_wait_max,
        logger=get_logger("worker"),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start the completion worker on startup and stop it on shutdown."""
        logger.info(f"Starting up the application for project: {settings.project_id}")
        await completion_worker.start()
        yield
        logger.warning("Shutting down gracefully")
        await completion_worker.stop()

    app = FastAPI(
        title="Scoping API",
        description="Training needs analysis questionnaire backend",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.datastore = datastore
    app.state.token_verifier = token_verifier
    app.state.completion_worker = completion_worker
    app.state.user_service = UserService(datastore.users, get_logger("users"))
    app.state.question_set_service = QuestionSetService(datastore.question_sets, get_logger("question_sets"))
    app.state.course_outline_service = CourseOutlineService(datastore.course_outlines, get_logger("course_outlines"))
    app.state.message_service = MessageService(datastore.messages, completion_worker, get_logger("messages"))

    install_middleware(app, get_logger("http"))
    install_error_handlers(app, get_logger("http"))

    @app.get("/", response_class=PlainTextResponse)
    def hello():
        return "Hello world"

    for router in (question_set_router, outline_router, user_router, message_router):
        app.include_router(router)

    for route in app.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or []))
        logger.debug(f"[{methods}]: '{route.path}'")

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scoping API server")
    parser.add_argument("--project-id", dest="project_id", default="", help="The id of the project (required)")
    parser.add_argument("--config", dest="config_path", default="config.yaml", help="Path to the YAML configuration")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.project_id:
        print("The '--project-id' flag is required", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    settings = Settings.from_env(project_id=args.project_id, config_path=args.config_path)
    settings.validate()

    app = create_app(settings)

    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_level="info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
