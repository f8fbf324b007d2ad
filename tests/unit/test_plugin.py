"""Unit tests for TransformPlugin host integration."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from transformcache.config import ProjectPaths, TransformConfig
from transformcache.hooks import BuildEvent, HookError, HostHooks
from transformcache.pipeline import PipelineStage, PipelineStageError
from transformcache.plugin import LIFECYCLE_PRIORITY, TransformPlugin
from transformcache.transforms import COPY_HANDLER_PRIORITY, TransformContext
from transformcache.watcher import WatchEvent, WatchEventKind


@pytest.fixture
def plugin(config: TransformConfig) -> TransformPlugin:
    return TransformPlugin(config)


@pytest.fixture
def hooks(plugin: TransformPlugin) -> HostHooks:
    host = HostHooks()
    plugin.register(host)
    return host


@pytest.mark.unit
class TestPluginRegistration:
    """Tests for attaching to host hook points."""

    def test_lifecycle_callbacks_registered(
        self, plugin: TransformPlugin, hooks: HostHooks
    ) -> None:
        assert hooks.pre_construct.callbacks == [plugin.handle_pre_construct]
        assert hooks.pre_compile.callbacks == [plugin.handle_pre_compile]
        assert hooks.post_clean.callbacks == [plugin.handle_post_clean]
        assert hooks.transform_file.callbacks == [plugin.copy_handler]

    def test_chain_uses_host_transform_hook(
        self, plugin: TransformPlugin, hooks: HostHooks
    ) -> None:
        assert plugin.chain.hook is hooks.transform_file

    def test_handlers_registered_before_register_stay_in_chain(
        self,
        plugin: TransformPlugin,
        paths: ProjectPaths,
        write_source: Callable[..., Path],
    ) -> None:
        write_source("a.txt")
        seen: list[Path] = []
        plugin.chain.register(lambda context: seen.append(context.src))
        host = HostHooks()

        plugin.register(host)
        plugin.run()

        assert seen == [(paths.src / "a.txt").resolve()]
        assert host.transform_file.callbacks[-1] is plugin.copy_handler
        assert (paths.dst / "a.txt").exists()

    def test_lifecycle_runs_before_default_priority(
        self, plugin: TransformPlugin, hooks: HostHooks
    ) -> None:
        other = MagicMock()
        hooks.pre_compile.register(other)

        assert hooks.pre_compile.callbacks[0] == plugin.handle_pre_compile
        assert LIFECYCLE_PRIORITY < COPY_HANDLER_PRIORITY


@pytest.mark.unit
class TestPluginHooks:
    """Tests for the host hook entry points."""

    def test_pre_compile_runs_pipeline(
        self,
        hooks: HostHooks,
        paths: ProjectPaths,
        write_source: Callable[..., Path],
        project_dir: Path,
    ) -> None:
        write_source("index.html", "<html/>")

        hooks.pre_compile.invoke(BuildEvent(project_dir))

        assert (paths.dst / "index.html").read_text() == "<html/>"
        assert paths.manifest.is_file()

    def test_pre_compile_failure_surfaces_as_hook_error(
        self, plugin: TransformPlugin, hooks: HostHooks, project_dir: Path
    ) -> None:
        plugin.pipeline = MagicMock()
        plugin.pipeline.run.side_effect = PipelineStageError(
            PipelineStage.LOAD, OSError("denied")
        )

        with pytest.raises(HookError) as exc_info:
            hooks.pre_compile.invoke(BuildEvent(project_dir))

        assert isinstance(exc_info.value.cause, PipelineStageError)

    def test_post_clean_removes_destination(
        self, hooks: HostHooks, paths: ProjectPaths, project_dir: Path
    ) -> None:
        (paths.dst / "sub").mkdir(parents=True)
        (paths.dst / "sub" / "old.txt").write_text("old")

        hooks.post_clean.invoke(BuildEvent(project_dir))

        assert not paths.dst.exists()

    def test_pre_construct_starts_watcher_in_liveview(
        self, plugin: TransformPlugin, hooks: HostHooks, project_dir: Path
    ) -> None:
        with patch("transformcache.plugin.SourceWatcher") as watcher_cls:
            hooks.pre_construct.invoke(BuildEvent(project_dir, liveview=True))

        watcher_cls.return_value.start.assert_called_once()
        assert plugin.watcher is watcher_cls.return_value

    def test_pre_construct_without_liveview_does_nothing(
        self, plugin: TransformPlugin, hooks: HostHooks, project_dir: Path
    ) -> None:
        with patch("transformcache.plugin.SourceWatcher") as watcher_cls:
            hooks.pre_construct.invoke(BuildEvent(project_dir))

        watcher_cls.assert_not_called()
        assert plugin.watcher is None

    def test_host_handler_claims_before_copy(
        self,
        plugin: TransformPlugin,
        hooks: HostHooks,
        paths: ProjectPaths,
        write_source: Callable[..., Path],
    ) -> None:
        write_source("style.scss", "a { b: c }")

        def compile_scss(context: TransformContext) -> None:
            if context.src.suffix != ".scss":
                return
            out = context.paths.dst / context.src.with_suffix(".css").name
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text("compiled")
            context.gen.append(str(out))
            context.processed = True

        hooks.transform_file.register(compile_scss)

        result = plugin.run()

        assert (paths.dst / "style.css").read_text() == "compiled"
        assert not (paths.dst / "style.scss").exists()
        key = str((paths.src / "style.scss").resolve())
        assert result.manifest.get(key).gen == [str(paths.dst / "style.css")]


@pytest.mark.unit
class TestPluginWatcher:
    """Tests for watch-triggered runs."""

    def test_watch_event_runs_pipeline(self, plugin: TransformPlugin, tmp_path: Path) -> None:
        plugin.pipeline = MagicMock()

        plugin._on_watch_event(WatchEvent(WatchEventKind.CHANGED, tmp_path / "a.txt"))

        plugin.pipeline.run.assert_called_once()

    def test_watch_event_failure_is_logged(
        self, plugin: TransformPlugin, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        plugin.pipeline = MagicMock()
        plugin.pipeline.run.side_effect = PipelineStageError(
            PipelineStage.TRANSFORM, OSError("denied")
        )

        plugin._on_watch_event(WatchEvent(WatchEventKind.ADDED, tmp_path / "a.txt"))

        assert "Pipeline run triggered by" in caplog.text

    def test_shutdown_stops_watcher(self, plugin: TransformPlugin) -> None:
        with patch("transformcache.plugin.SourceWatcher") as watcher_cls:
            plugin.start_watcher()
            plugin.shutdown()

        watcher_cls.return_value.stop.assert_called_once()

    def test_shutdown_without_watcher(self, plugin: TransformPlugin) -> None:
        plugin.shutdown()

        assert plugin.watcher is None
