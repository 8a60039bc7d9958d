from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from tetris_engine.game import (
    Action,
    ActionType,
    Board,
    GameSnapshot,
    GameStatus,
    Piece,
    PieceGenerator,
    ScoringRules,
    TransformKind,
    attempt_transform,
    complete_line_clear,
)

from .collaborators import (
    InMemoryScoreStore,
    NullSettingsNavigator,
    NullSoundSink,
    ScoreStore,
    SettingsNavigator,
    SoundSink,
    SoundType,
)
from .config import EngineConfig
from .scheduler import ManualScheduler, Scheduler
from .timers import DescentTimer, ScreenClearAnimation


logger = logging.getLogger(__name__)

Observer = Callable[[GameSnapshot], None]

TRANSFORM_SOUNDS = {
    TransformKind.LEFT: SoundType.TRANSFORMATION,
    TransformKind.RIGHT: SoundType.TRANSFORMATION,
    TransformKind.FAST_DOWN: SoundType.TRANSFORMATION,
    TransformKind.FALL: SoundType.FALL,
    TransformKind.ROTATE: SoundType.ROTATE,
    TransformKind.DOWN: None,
}


class GameMachine:
    """Owns the current GameSnapshot and every transition between snapshots.

    All changes go through `dispatch()` or the machine's own timer callbacks,
    which run on the scheduler. Call it from one thread only (the asyncio loop
    or the frame loop driving a ManualScheduler).
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        *,
        rules: Optional[ScoringRules] = None,
        sound: Optional[SoundSink] = None,
        score_store: Optional[ScoreStore] = None,
        settings: Optional[SettingsNavigator] = None,
        pieces: Optional[PieceGenerator] = None,
    ) -> None:
        # Private copy: set_descent_interval writes to it
        self.config = replace(config) if config is not None else EngineConfig()
        self.scheduler = scheduler or ManualScheduler()
        self.rules = rules or ScoringRules()
        self.sound = sound or NullSoundSink()
        self.score_store = score_store or InMemoryScoreStore()
        self.settings = settings or NullSettingsNavigator()
        self.pieces = pieces or PieceGenerator(self.config.random_seed)

        self._snapshot = GameSnapshot.initial(self.config.width, self.config.height, self.config.sound_enabled)
        self._observers: List[Observer] = []
        self.descent_timer = DescentTimer(self.scheduler, self.config.descent_interval_ms, self._on_descent_tick)
        self.screen_clear = ScreenClearAnimation(self.scheduler, self.config.clear_frame_ms, self.config.clear_tail_ms)

    # -- Observation --
    @property
    def snapshot(self) -> GameSnapshot:
        return self._snapshot

    @property
    def score(self) -> int:
        return self.score_store.score

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Push every new snapshot to `observer`, starting with the current one.

        Returns a function that removes the subscription.
        """
        self._observers.append(observer)
        observer(self._snapshot)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # -- Tuning --
    def set_descent_interval(self, interval_ms: int) -> None:
        """Takes effect from the next scheduled tick; a pending tick keeps its delay."""
        self.descent_timer.interval_ms = interval_ms
        self.config.descent_interval_ms = self.descent_timer.interval_ms

    def close(self) -> None:
        """Stop all timers, e.g. when the host shuts down."""
        self.descent_timer.cancel()
        self.screen_clear.cancel()

    # -- Input --
    def dispatch(self, action: Action) -> None:
        action_type = action.type
        if action_type in (ActionType.WELCOME, ActionType.RESET):
            self._on_welcome()
        elif action_type is ActionType.START:
            self._on_start()
        elif action_type is ActionType.PAUSE:
            self._on_pause(play_sound=True)
        elif action_type is ActionType.BACKGROUND:
            self._on_pause(play_sound=False)
        elif action_type is ActionType.RESUME:
            pass
        elif action_type is ActionType.TOGGLE_SOUND:
            self._play(SoundType.TRANSFORMATION)
            self._emit(replace(self._snapshot, sound_enabled=not self._snapshot.sound_enabled))
        elif action_type is ActionType.OPEN_SETTINGS:
            self.settings.open_settings()
        elif action_type is ActionType.TRANSFORM:
            self._on_transform(action.transform_kind)
        else:
            raise ValueError(f"Unhandled action: {action!r}")

    # -- Transitions --
    def _on_welcome(self) -> None:
        def finish() -> None:
            self.score_store.reset()
            self._emit(GameSnapshot.initial(self.config.width, self.config.height, self._snapshot.sound_enabled))

        self._start_screen_clear(finish)

    def _on_start(self) -> None:
        if not self._snapshot.can_start_game:
            logger.debug("Start ignored in %s", self._snapshot.status.name)
            return
        self._play(SoundType.TRANSFORMATION)
        if self._snapshot.status is GameStatus.PAUSED:
            self._emit(replace(self._snapshot, status=GameStatus.RUNNING))
        else:
            piece = Piece.spawn(self.pieces.next_kind(), self.config.width, self.config.spawn_y)
            self._emit(
                GameSnapshot(
                    status=GameStatus.RUNNING,
                    board=Board.empty(self.config.width, self.config.height),
                    piece=piece,
                    sound_enabled=self._snapshot.sound_enabled,
                )
            )
        self._start_descent()

    def _on_pause(self, play_sound: bool) -> None:
        if not self._snapshot.is_running:
            logger.debug("Pause ignored in %s", self._snapshot.status.name)
            return
        self.descent_timer.cancel()
        if play_sound:
            self._play(SoundType.TRANSFORMATION)
        self._emit(replace(self._snapshot, status=GameStatus.PAUSED))

    def _on_transform(self, kind: TransformKind) -> None:
        if not self._snapshot.is_running:
            logger.debug("%s ignored in %s", kind.name, self._snapshot.status.name)
            return
        result = attempt_transform(self._snapshot, kind, self.pieces.next_kind, self.config.spawn_y)
        if result is None:
            logger.debug("%s rejected", kind.name)
            return

        sound = TRANSFORM_SOUNDS[kind]
        if sound is not None:
            self._play(sound)

        if result.status is GameStatus.RUNNING:
            self._emit(result)
            if kind in (TransformKind.DOWN, TransformKind.FAST_DOWN, TransformKind.FALL):
                self._start_descent()
        elif result.status is GameStatus.LINE_CLEARING:
            self._play(SoundType.CLEAN)
            self._emit(result)
            self.score_store.add(self.rules.score_for_lines(len(result.cleared_rows)))
            cleared = complete_line_clear(result, self.pieces.next_kind, self.config.spawn_y)
            if cleared.status is GameStatus.GAME_OVER:
                self._on_game_over(cleared)
            else:
                self._emit(cleared)
                self._start_descent()
        elif result.status is GameStatus.GAME_OVER:
            self._on_game_over(result)
        else:
            raise ValueError(f"Transform produced unexpected status {result.status.name}")

    def _on_game_over(self, snapshot: GameSnapshot) -> None:
        logger.info("Game over (score %d)", self.score_store.score)
        self._emit(snapshot)

        def finish() -> None:
            self._emit(
                GameSnapshot(
                    status=GameStatus.GAME_OVER,
                    board=Board.empty(self.config.width, self.config.height),
                    sound_enabled=self._snapshot.sound_enabled,
                )
            )

        self._start_screen_clear(finish)

    # -- Timers --
    def _start_descent(self) -> None:
        # An observer may have paused or reset the game during the broadcast
        if not self._snapshot.is_running:
            return
        self.screen_clear.cancel()
        self.descent_timer.start()

    def _on_descent_tick(self) -> None:
        self.dispatch(Action.transform(TransformKind.DOWN))

    def _start_screen_clear(self, on_complete: Callable[[], None]) -> None:
        self.descent_timer.cancel()
        self._play(SoundType.WELCOME)
        self.screen_clear.start(self._snapshot.board, self._on_clear_frame, on_complete)

    def _on_clear_frame(self, board: Board) -> None:
        self._emit(
            replace(
                self._snapshot,
                status=GameStatus.SCREEN_CLEARING,
                board=board,
                piece=None,
                cleared_rows=(),
            )
        )

    # -- Side effects --
    def _emit(self, snapshot: GameSnapshot) -> None:
        if snapshot == self._snapshot:
            return
        logger.debug("%s -> %s", self._snapshot.status.name, snapshot.status.name)
        self._snapshot = snapshot
        for observer in list(self._observers):
            # An observer dispatched and a newer snapshot has already gone out
            if snapshot is not self._snapshot:
                break
            observer(snapshot)

    def _play(self, sound: SoundType) -> None:
        if not self._snapshot.sound_enabled:
            return
        try:
            self.sound.play(sound)
        except Exception:
            logger.warning("Sound sink failed to play %s", sound.name, exc_info=True)
