from __future__ import annotations

import argparse
from html import escape
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
import uvicorn

from ..builder import DungeonBuilder
from ..config import Config, default_config, load_config
from ..evaluation import layout_payload
from ..layout import DungeonLayout
from ..logging_config import setup_logging
from ..params import InvalidParameter
from ..render import render_ascii


class DungeonManager:
    def __init__(self, config: Config) -> None:
        self._config = config
        self._builder = DungeonBuilder(config)
        self._current_dungeon: Optional[DungeonLayout] = None
        self._current_origin: Optional[tuple[int, int, int]] = None

    def get_dungeon(self, origin: tuple[int, int, int], reload: bool = False) -> DungeonLayout:
        if reload or self._current_dungeon is None or self._current_origin != origin:
            self._current_dungeon = self._builder.generate_at(origin)
            self._current_origin = origin
        return self._current_dungeon

    def preview(
        self,
        origin: tuple[int, int, int],
        size: Optional[int],
        iterations: Optional[int],
        turtles: Optional[int],
        rooms: Optional[int],
        seed: Optional[int] = None,
    ) -> DungeonLayout:
        builder = self._builder if seed is None else DungeonBuilder(self._config, seed=seed)
        return builder.generate_preview_at(origin, size, iterations, turtles, rooms)


def create_app(config_path: Optional[Path] = None, config: Optional[Config] = None) -> FastAPI:
    if config is None:
        config = load_config(config_path) if config_path is not None else default_config()
    manager = DungeonManager(config)

    app = FastAPI(title="Necrosis Dungeon Generator", version="0.1.0")

    @app.get("/", response_class=HTMLResponse)
    async def serve_index() -> HTMLResponse:
        dungeon = manager.get_dungeon((0, 0, 0))
        return HTMLResponse(f"<html><body><pre>{escape(render_ascii(dungeon))}</pre></body></html>")

    @app.get("/api/dungeon")
    async def get_dungeon(x: int = 0, y: int = 0, z: int = 0, reload: Optional[int] = None) -> JSONResponse:
        try:
            dungeon = manager.get_dungeon((x, y, z), reload=bool(reload))
        except InvalidParameter as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return JSONResponse(layout_payload(dungeon))

    @app.get("/api/preview")
    async def get_preview(
        size: Optional[int] = None,
        iterations: Optional[int] = None,
        turtles: Optional[int] = None,
        rooms: Optional[int] = None,
        x: int = 0,
        y: int = 0,
        z: int = 0,
        seed: Optional[int] = None,
        format: str = "json",
    ):
        if format not in ("json", "ascii"):
            raise HTTPException(status_code=400, detail="format must be 'json' or 'ascii'.")
        try:
            dungeon = manager.preview((x, y, z), size, iterations, turtles, rooms, seed=seed)
        except InvalidParameter as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if format == "ascii":
            return PlainTextResponse(render_ascii(dungeon))
        return JSONResponse(layout_payload(dungeon))

    return app


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Serve the Necrosis dungeon generator over HTTP.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the dungeon configuration file.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file.")
    args = parser.parse_args(argv)

    config = load_config(args.config.resolve()) if args.config is not None else default_config()
    setup_logging(config.logging.level, args.log_file)
    app = create_app(config=config)
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
