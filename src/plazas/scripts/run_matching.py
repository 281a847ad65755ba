"""
Script para ejecutar el matching y mostrar la asignación final.

Uso:
    python -m plazas.scripts.run_matching --sample
    python -m plazas.scripts.run_matching --input problema.json --format json
    python -m plazas.scripts.run_matching --input problema.json --round-mode reactive --trace --verify
"""

import argparse
import logging
import sys
from typing import Optional

import structlog

from plazas.config import ROUND_MODES, get_settings
from plazas.exceptions import PlazasError
from plazas.loaders import load_problem, sample_problem
from plazas.matching import MatchingEngine, find_blocking_pairs
from plazas.report import render_json, render_text

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_UNSTABLE = 1
EXIT_INVALID_INPUT = 2
EXIT_INTERRUPTED = 130


def configure_logging(log_level: str):
    """Configura logging stdlib + structlog (los logs van a stderr)."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Asignación estable de postulantes a programas con cupo"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", "-i", help="Archivo JSON con postulantes y programas")
    source.add_argument(
        "--sample", action="store_true", help="Usar el problema de ejemplo empaquetado"
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default=settings.report_format,
        help="Formato del reporte (default: %(default)s)",
    )
    parser.add_argument(
        "--round-mode",
        choices=ROUND_MODES,
        default=settings.round_mode,
        help="Recorrido de cada ronda (default: %(default)s)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        default=settings.record_events,
        help="Incluir cada postulación en el reporte",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        default=settings.verify_stability,
        help="Buscar pares bloqueantes; sale con código 1 si hay alguno",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Nivel de logging (default: %(default)s)",
    )
    return parser


def run_matching(
    input_path: Optional[str] = None,
    use_sample: bool = False,
    report_format: str = "text",
    round_mode: str = "snapshot",
    trace: bool = False,
    verify: bool = False,
) -> tuple[str, bool]:
    """
    Carga el problema, corre el motor y arma el reporte.

    Returns:
        (reporte, estable). Sin --verify se asume estable.
    """
    problem = sample_problem() if use_sample else load_problem(input_path)

    engine = MatchingEngine(round_mode=round_mode, record_events=trace)
    result = engine.run(problem)

    blocking_pairs = find_blocking_pairs(problem, result.assignment) if verify else None

    render = render_json if report_format == "json" else render_text
    report = render(problem, result, blocking_pairs)

    return report, not blocking_pairs


def main(argv: Optional[list[str]] = None):
    """Entry point del script."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    logger.info("Iniciando matching...", source=args.input or "sample")

    try:
        report, stable = run_matching(
            input_path=args.input,
            use_sample=args.sample,
            report_format=args.format,
            round_mode=args.round_mode,
            trace=args.trace,
            verify=args.verify,
        )
    except KeyboardInterrupt:
        logger.info("Matching interrumpido por usuario")
        sys.exit(EXIT_INTERRUPTED)
    except PlazasError as e:
        logger.error("Entrada inválida", error=str(e), problems=getattr(e, "problems", []))
        sys.exit(EXIT_INVALID_INPUT)

    print(report)

    if not stable:
        logger.error("La asignación tiene pares bloqueantes")
        sys.exit(EXIT_UNSTABLE)

    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
