"""
HTTP front end for wakachi.

    POST /parse  {"sentence": "パンを食べた"}

responds with the list of words and their definitions.

Run with:
    wakachi-server
    uvicorn wakachi.server:app --port 8080
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from wakachi import __version__, settings
from wakachi.dictionary import Dictionary, load_dictionary
from wakachi.output import sentence_to_list

logger = logging.getLogger(__name__)


# ============================================================================
# Request / Response Models
# ============================================================================

class ParseRequest(BaseModel):
    """Request body for /parse."""
    sentence: str = Field(..., max_length=settings.MAX_SENTENCE_LENGTH, description="Japanese text to segment")

    @field_validator("sentence", mode="before")
    @classmethod
    def replace_lone_surrogates(cls, value):
        # JSON allows escaped lone surrogates (\ud800); they become U+FFFD
        if isinstance(value, str):
            return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
        return value


class SenseResponse(BaseModel):
    glossary: list[str] = Field(default_factory=list)
    pos: list[str] = Field(default_factory=list)


class ConjugationResponse(BaseModel):
    """Conjugation rule undone to reach the entry."""
    ending: str
    base: str
    pos: str
    name: str


class DefinitionResponse(BaseModel):
    kanji: list[str] = Field(default_factory=list, description="Kanji spellings")
    readings: list[str] = Field(..., description="Kana readings")
    kana: str = Field(..., description="First reading in hiragana")
    sense: list[SenseResponse]
    conjugation: ConjugationResponse | None = None


class WordResponse(BaseModel):
    """One word of the parsed sentence."""
    original: str = Field(..., description="Text exactly as it appeared in the input")
    definitions: list[DefinitionResponse] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str


# ============================================================================
# Application
# ============================================================================

def create_app(dictionary: Optional[Dictionary] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        dictionary: Dictionary to serve. Loaded at startup if not given.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.dictionary is None:
            logger.info("Loading dictionary...")
            app.state.dictionary = load_dictionary()
            logger.info("Server up and running")
        yield

    app = FastAPI(
        title="wakachi",
        description="Japanese word segmentation with dictionary definitions",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dictionary = dictionary

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "invalid body"})

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post(
        "/parse",
        response_model=list[WordResponse],
        responses={400: {"model": ErrorResponse}},
        tags=["Parse"],
    )
    def parse_endpoint(body: ParseRequest, request: Request) -> list[WordResponse]:
        """Segment a sentence into words with definitions."""
        sentence = request.app.state.dictionary.parse(body.sentence)
        return [WordResponse.model_validate(word) for word in sentence_to_list(sentence)]

    return app


app = create_app()


def main():
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=settings.LOG_FORMAT,
    )
    uvicorn.run(app, host=settings.SERVER_HOST, port=settings.SERVER_PORT)


if __name__ == "__main__":
    main()
