"""
FastAPI entry point — the HTTP surface the automation host calls.
See docs/CleanArchitecture.md — Phase 6 for the architectural rationale.

create_app() is the Composition Root for HTTP runs: it wires the configured
adapters and passes them to GenerateTextUseCase. Authentication is performed
by an ITokenValidator reading the Bearer JWT from each request; it is skipped
when Cognito is not configured.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:create_app --factory --reload --port 8000
"""

from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from src.application.use_cases.generate_text import GenerateTextUseCase
from src.domain.entities.generation import GenerationMode, GenerationRequest
from src.domain.ports.token_validator_port import ITokenValidator
from src.infrastructure.config.settings import NodeConfig, configure_logging
from src.infrastructure.entrypoints.composition import build_token_validator, build_use_case


class GenerateRequestBody(BaseModel):
    mode: GenerationMode = GenerationMode.CHAT
    system_instruction: str = ""
    user_instruction: str = ""
    temperature: float = 1.0
    credential: str = ""
    session_id: Optional[str] = None


def create_app(
    config: Optional[NodeConfig] = None,
    use_case: Optional[GenerateTextUseCase] = None,
    validator: Optional[ITokenValidator] = None,
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        config:    NodeConfig; read from the environment (and .env) when omitted.
        use_case:  Pre-built GenerateTextUseCase; wired from *config* when omitted.
        validator: ITokenValidator; built from *config* when omitted (None disables auth).
    """
    if config is None:
        load_dotenv()
        config = NodeConfig.from_env()
        configure_logging(config.log_level)
    if use_case is None:
        use_case = build_use_case(config)
    if validator is None:
        validator = build_token_validator(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        use_case.flush()

    app = FastAPI(title="LLM Generation Node", lifespan=lifespan)

    async def get_current_user(request: Request) -> dict:
        """FastAPI dependency: validate the Cognito JWT from the Authorization header."""
        if validator is None:
            return {}
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith("Bearer "):
            raise HTTPException(status_code=401, detail="Missing or invalid Authorization header.")
        token = auth_header.split(" ", 1)[1]
        try:
            return validator.validate(token)
        except ValueError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc

    @app.post("/generate")
    async def generate(
        body: GenerateRequestBody,
        user: dict = Depends(get_current_user),
    ) -> dict:
        """Run one generation; the body holds exactly one of "response" or "error".

        ±Infinity temperatures are clamped by GenerationRequest; NaN is a 422.
        """
        try:
            request = GenerationRequest(
                mode=body.mode,
                system_instruction=body.system_instruction,
                user_instruction=body.user_instruction,
                temperature=body.temperature,
                credential=body.credential,
                user_id=user.get("sub"),
                session_id=body.session_id,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        result = await use_case.execute(request)
        return result.as_outputs()

    @app.get("/health")
    async def health():
        return {"status": "ok", "provider": use_case.provider_name}

    return app
