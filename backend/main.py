import argparse
import json
import logging
import os
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from config import GameConfig
from data_access import load_high_score, store_high_score
from domain.snapshot import BoardSnapshot
from engine.session import IDLE, SessionController
from players import get_player_class
from players.base import Player

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Runs one headless session:
      - a simulated fixed-rate clock feeding the controller
      - a player asked for a move once per tick
      - a per-tick history for replay
    """
    def __init__(
        self,
        controller: SessionController,
        player: Player,
        fps: int = 60,
        game_id: Optional[str] = None,
        identifier: Optional[str] = None,
    ):
        self.controller = controller
        self.player = player
        self.fps = fps
        self.frame_time = 1.0 / fps
        self.game_id = game_id or str(uuid.uuid4())
        self.identifier = identifier
        self.frames = 0
        self.start_time = time.time()
        self.history: List[Dict[str, Any]] = []
        self._last_tick_seen: Optional[int] = None

        controller.request_identifier = lambda score: self.identifier

    def run_frame(self):
        """
        Execute one clock frame:
          1) If a new tick happened since the last frame, ask the player for a move
          2) Record the board the move was chosen on
          3) Feed one frame of time into the controller
        """
        snapshot = self.controller.snapshot()
        if snapshot.tick != self._last_tick_seen:
            self._last_tick_seen = snapshot.tick
            move = self.player.get_move(snapshot)
            self.controller.set_intent(move)
            self.record_history(snapshot, move)

        result = self.controller.drive(self.frame_time)
        self.frames += 1
        return result

    def run(self, max_frames: int) -> BoardSnapshot:
        if self.controller.status == IDLE:
            self.controller.start()
        while not self.controller.game_over and self.frames < max_frames:
            self.run_frame()

        final = self.controller.snapshot()
        if final.game_over:
            logger.info("Game %s over at tick %s with score %s.", self.game_id, final.tick, final.score)
        else:
            logger.info("Game %s stopped after %s frames (tick %s).", self.game_id, self.frames, final.tick)
        return final

    def record_history(self, snapshot: BoardSnapshot, move: str):
        state = snapshot.to_dict()
        # The scoreboard only changes at game over; keep it in the metadata instead
        state.pop("scoreboard", None)
        state["move"] = move
        self.history.append(state)

    def save_history_to_json(self, directory: str = "completed_games", filename: Optional[str] = None) -> str:
        if filename is None:
            filename = f"snake_game_{self.game_id}.json"

        final = self.controller.snapshot()
        metadata = {
            "game_id": self.game_id,
            "player": self.player.name,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(timezone.utc).isoformat(),
            "board_size": final.size,
            "fps": self.fps,
            "frames": self.frames,
            "ticks": final.tick,
            "final_score": final.score,
            "final_level": final.level,
            "status": final.status,
            "high_score": final.high_score,
            "scoreboard": final.to_dict()["scoreboard"],
        }

        data = {
            "metadata": metadata,
            "rounds": self.history,
        }

        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info("Saved replay to %s", path)
        return path


def create_player(kind: str, model: Optional[str] = None, rng: Optional[random.Random] = None) -> Player:
    """
    Instantiate a player by registry key.

    Raises:
        ValueError: for unknown kinds, or an LLM player without a model.
    """
    player_cls = get_player_class(kind)
    if kind.strip().lower() == "llm":
        if not model:
            raise ValueError("The llm player needs --model (an OpenRouter model slug).")
        return player_cls({"name": model, "model_name": model}, rng=rng)
    return player_cls(rng=rng)


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    player: Player,
    config: GameConfig,
    max_frames: int = 36000,
    identifier: Optional[str] = None,
    save_replay: bool = False,
    replay_dir: str = "completed_games",
    persist: bool = True,
) -> Dict[str, Any]:
    """
    Runs a single headless game.

    Args:
        player: the intent source
        config: board size, pacing and seed
        max_frames: clock frames before the run is stopped
        identifier: scoreboard name recorded at game over
        save_replay: write completed_games/snake_game_<id>.json
        replay_dir: directory for the replay file
        persist: load and store the high score through data_access

    Returns:
        A dictionary summarizing the game.
    """
    kwargs = {}
    if persist:
        kwargs["load_high_score"] = load_high_score
        kwargs["store_high_score"] = store_high_score
    controller = SessionController.from_config(config, **kwargs)

    game = SnakeGame(controller, player, fps=config.host_fps, identifier=identifier)
    final = game.run(max_frames)

    replay_path = game.save_history_to_json(directory=replay_dir) if save_replay else None

    return {
        "game_id": game.game_id,
        "player": player.name,
        "status": final.status,
        "final_score": final.score,
        "level": final.level,
        "ticks": final.tick,
        "high_score": final.high_score,
        "scoreboard": final.to_dict()["scoreboard"],
        "replay_path": replay_path,
        "board": final.print_board(),
    }


# -------------------------------
# Main Entry Point
# -------------------------------
def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Run a headless toroidal snake game driven by an automated player."
    )
    parser.add_argument("--player", type=str, default="random",
                        help="Player kind: 'random' or 'llm'")
    parser.add_argument("--model", type=str, default=None,
                        help="OpenRouter model slug for the llm player")
    parser.add_argument("--size", type=int, default=None,
                        help="Board bound N; coordinates run from -N to N")
    parser.add_argument("--step-interval", type=float, default=None,
                        help="Seconds between ticks at the start of the game")
    parser.add_argument("--fps", type=int, default=None,
                        help="Simulated clock frames per second")
    parser.add_argument("--max-frames", type=int, default=36000,
                        help="Stop after this many clock frames")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for spawns and the random player")
    parser.add_argument("--name", type=str, default=None,
                        help="Scoreboard name recorded at game over")
    parser.add_argument("--save-replay", action="store_true",
                        help="Write the per-tick history to completed_games/")
    parser.add_argument("--no-persist", action="store_true",
                        help="Do not read or write the stored high score")

    args = parser.parse_args(argv)

    config = GameConfig.from_env()
    if args.size is not None:
        config.board_size = args.size
    if args.step_interval is not None:
        config.step_interval = args.step_interval
    if args.fps is not None:
        config.host_fps = args.fps
    if args.seed is not None:
        config.rng_seed = args.seed
    config.validate()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    player_rng = random.Random(config.rng_seed) if config.rng_seed is not None else None
    player = create_player(args.player, model=args.model, rng=player_rng)

    result = run_simulation(
        player,
        config,
        max_frames=args.max_frames,
        identifier=args.name,
        save_replay=args.save_replay,
        persist=not args.no_persist,
    )

    print("\n" + result.pop("board") + "\n")
    print("Simulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
