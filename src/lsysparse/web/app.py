from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from ..config import ParserConfig, load_config
from ..errors import LSystemSyntaxError
from ..parser import LSystemParser


class ParserManager:
    def __init__(self, config_path: Optional[Path]) -> None:
        self._config_path = config_path
        self._parser: Optional[LSystemParser] = None

    def get_parser(self, reload: bool = False) -> LSystemParser:
        if reload or self._parser is None:
            if self._config_path is None:
                config = ParserConfig()
            else:
                config = load_config(self._config_path).parser
            self._parser = LSystemParser(config)
        return self._parser


def create_app(config_path: Optional[Path] = None) -> FastAPI:
    manager = ParserManager(config_path)
    # Validate configuration (raises on error) before serving.
    manager.get_parser()

    app = FastAPI(title="L-system Parser", version="0.1.0")

    @app.post("/api/parse")
    async def parse_lsystem(request: Request, reload: Optional[int] = None) -> JSONResponse:
        body = await request.body()
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError:
            return JSONResponse({"error": "Request body must be UTF-8 text."}, status_code=400)
        try:
            lsystem = manager.get_parser(reload=bool(reload)).parse(text)
        except LSystemSyntaxError as exc:
            return JSONResponse(exc.to_dict(), status_code=422)
        return JSONResponse(lsystem.to_dict())

    @app.get("/api/aliases")
    async def get_aliases() -> JSONResponse:
        aliases = manager.get_parser().aliases
        return JSONResponse({name: repr(rule) for name, rule in sorted(aliases.items())})

    return app


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run the L-system parser web service.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML config file with parser settings.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    args = parser.parse_args(argv)

    config_path = args.config.resolve() if args.config is not None else None
    app = create_app(config_path)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
