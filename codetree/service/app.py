"""FastAPI application entrypoint for codetree service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..orchestrator import Orchestrator, ScanOutcome, resolve_root
from ..renderers import get_renderer
from ..report import ProjectReport


class ScanRequest(BaseModel):
    path: str
    format: Optional[str] = None
    output_name: Optional[str] = None
    write: bool = False


class ExcludedEntry(BaseModel):
    path: str
    size: int
    reason: str
    file_count: Optional[int] = None


class ScanSummary(BaseModel):
    total_files: int
    total_lines: int
    code_lines: int
    comment_lines: int
    blank_lines: int
    total_size_bytes: int
    sensitive_files_count: int
    excluded_size_bytes: int


class ScanResponse(BaseModel):
    root: str
    format: str
    project_types: List[str]
    frameworks: Dict[str, str]
    summary: ScanSummary
    excluded: List[ExcludedEntry]
    report_path: Optional[str] = None
    content: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    # No executable name to skip when scanning from the service.
    return Orchestrator(program_name="")


def _summarize(report: ProjectReport) -> tuple[ScanSummary, List[ExcludedEntry]]:
    stats = report.statistics
    summary = ScanSummary(
        total_files=stats.total_files,
        total_lines=stats.total_lines,
        code_lines=stats.code_lines,
        comment_lines=stats.comment_lines,
        blank_lines=stats.blank_lines,
        total_size_bytes=stats.total_size_bytes,
        sensitive_files_count=stats.sensitive_files_count,
        excluded_size_bytes=report.exclusions.total_size,
    )
    excluded = [
        ExcludedEntry(path=entry.path, size=entry.size, reason=entry.reason, file_count=entry.file_count)
        for entry in report.exclusions.directories
    ]
    excluded.extend(
        ExcludedEntry(path=entry.path, size=entry.size, reason=entry.reason)
        for entry in report.exclusions.files
    )
    return summary, excluded


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing codetree scans."""

    app = FastAPI(title="Codetree Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh instance per request so scans never share state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/scan", response_model=ScanResponse)
    async def scan(
        payload: ScanRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ScanResponse:
        def _run() -> ScanResponse:
            root = resolve_root(payload.path)
            if payload.write:
                outcome: ScanOutcome = orchestrator.run(
                    root,
                    output_format=payload.format,
                    output_name=payload.output_name,
                    progress=False,
                )
                report = outcome.report
                fmt = outcome.output_format
                report_path: Optional[str] = str(outcome.path)
                content: Optional[str] = None
            else:
                settings = orchestrator.resolve_settings(
                    root,
                    output_format=payload.format,
                    output_name=payload.output_name,
                    progress=False,
                )
                report = orchestrator.scan(root, settings)
                fmt = settings.output_format
                report_path = None
                content = get_renderer(fmt).render(report)

            summary, excluded = _summarize(report)
            return ScanResponse(
                root=report.root,
                format=fmt.value,
                project_types=report.project_types,
                frameworks=report.frameworks,
                summary=summary,
                excluded=excluded,
                report_path=report_path,
                content=content,
            )

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
