"""Benchmark session: target selection, execution, reporting and exit codes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from pydantic import ValidationError

from dsb_common.errors import BenchmarkInterrupted, ConfigurationError, DSBError
from dsb_runner.engine.orchestrator import BenchmarkOrchestrator
from dsb_runner.engine.stop_token import StopToken
from dsb_runner.models.config import BenchmarkConfig, RunnerSettings, SizePreset
from dsb_runner.models.results import AggregateResult
from dsb_runner.services import environment
from dsb_runner.services.report import DEFAULT_LOG_DIR, BenchmarkReport, save_report
from dsb_runner.services.volumes import VolumeInfo, list_volumes, volume_for_path
from dsb_ui.presenters.benchmark import UIBenchmarkListener
from dsb_ui.ui import prompts
from dsb_ui.ui.interfaces import UIAdapter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass
class SessionOptions:
    """Command-line choices; anything left unset is asked for interactively."""

    path: Optional[Path] = None
    size: Optional[SizePreset] = None
    rounds: Optional[int] = None
    settings_file: Optional[Path] = None
    assume_yes: bool = False
    save: Optional[bool] = None
    log_dir: Path = DEFAULT_LOG_DIR

    @property
    def interactive(self) -> bool:
        return self.path is None or self.size is None


class BenchmarkSession:
    """Drives one or more benchmark runs and maps their outcome to an exit code."""

    def __init__(
        self,
        ui: UIAdapter,
        options: SessionOptions,
        *,
        orchestrator_factory: Callable[..., BenchmarkOrchestrator] = BenchmarkOrchestrator,
        stop_token_factory: Callable[[], StopToken] = StopToken,
        volumes_provider: Callable[[], List[VolumeInfo]] = list_volumes,
        environment_check: Callable[[], str] = environment.check_environment,
        is_tty: Callable[[], bool] = prompts._check_tty,
    ) -> None:
        self.ui = ui
        self.options = options
        self._orchestrator_factory = orchestrator_factory
        self._stop_token_factory = stop_token_factory
        self._volumes_provider = volumes_provider
        self._environment_check = environment_check
        self._is_tty = is_tty

    def run(self) -> int:
        try:
            self._environment_check()
            settings = self.load_settings()
        except DSBError as exc:
            self._report_error(exc)
            return EXIT_FAILURE

        while True:
            try:
                completed = self.run_once(settings)
            except (BenchmarkInterrupted, KeyboardInterrupt):
                self.ui.show_warning("Benchmark interrupted; temporary file removed.")
                return EXIT_OK
            except DSBError as exc:
                self._report_error(exc)
                return EXIT_FAILURE
            except Exception as exc:
                logger.exception("Unexpected failure")
                self.ui.show_error(f"Unexpected error: {exc}")
                return EXIT_FAILURE
            if not completed:
                return EXIT_OK
            if not (self.options.interactive and self._is_tty() and prompts.ask_continue()):
                return EXIT_OK

    def load_settings(self) -> RunnerSettings:
        settings = RunnerSettings()
        if self.options.settings_file is not None:
            try:
                settings = RunnerSettings.load(self.options.settings_file)
            except (OSError, ValidationError) as exc:
                raise ConfigurationError(
                    f"Invalid settings file {self.options.settings_file}: {exc}",
                    context={"settings_file": str(self.options.settings_file)},
                    cause=exc,
                ) from exc
        if self.options.rounds is not None:
            settings = settings.model_copy(update={"rounds": self.options.rounds})
        return settings

    def run_once(self, settings: RunnerSettings) -> bool:
        """Run a single benchmark; return False when the operator declined it."""
        volume = self._resolve_volume()
        target = Path(volume.mount_path) if self.options.path is None else self.options.path
        config = self._build_config(target, self._resolve_size(), settings)

        if not self.options.assume_yes:
            if not self._is_tty():
                raise ConfigurationError(
                    "Confirmation required; pass --yes when running without a terminal"
                )
            if not prompts.confirm_run(config):
                self.ui.show_info("Benchmark cancelled.")
                return False

        result = self._execute(config)
        self._maybe_save(config, result, volume)
        return True

    def _resolve_volume(self) -> Optional[VolumeInfo]:
        with self.ui.status("Scanning volumes"):
            volumes = self._volumes_provider()
        if self.options.path is not None:
            return volume_for_path(self.options.path, volumes)
        if not volumes:
            raise ConfigurationError("No volumes available for testing")
        if not self._is_tty():
            raise ConfigurationError("No --path given and no terminal to choose a volume")
        return prompts.select_volume(volumes, self.ui)

    def _resolve_size(self) -> SizePreset:
        if self.options.size is not None:
            return self.options.size
        if not self._is_tty():
            raise ConfigurationError("No --size given and no terminal to choose one")
        return prompts.select_size()

    @staticmethod
    def _build_config(target: Path, size: SizePreset, settings: RunnerSettings) -> BenchmarkConfig:
        try:
            return BenchmarkConfig.from_preset(target, size, settings)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid benchmark configuration: {exc}",
                context={"target_path": str(target), "size": size.value},
                cause=exc,
            ) from exc

    def _execute(self, config: BenchmarkConfig) -> AggregateResult:
        listener = UIBenchmarkListener(self.ui)
        with self._stop_token_factory() as stop_token:
            orchestrator = self._orchestrator_factory(listener=listener, stop_token=stop_token)
            return orchestrator.run(config)

    def _maybe_save(
        self, config: BenchmarkConfig, result: AggregateResult, volume: Optional[VolumeInfo]
    ) -> None:
        save = self.options.save
        if save is None:
            save = self._is_tty() and prompts.ask_save()
        if not save:
            return
        report = BenchmarkReport(
            config=config,
            result=result,
            environment=environment.collect_environment(),
            volume=volume,
        )
        path = save_report(report, self.options.log_dir)
        self.ui.show_success(f"Results saved to {path}")

    def _report_error(self, exc: DSBError) -> None:
        logger.debug("Session failed: %s", exc.to_dict())
        self.ui.show_error(f"Error: {exc}")
