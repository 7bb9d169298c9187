from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class Paths:
    repo_root: Path
    data_dir: Path
    schema_dir: Path
    userdata_dir: Path
    state_file: Path
    telemetry_file: Path

    def with_state_file(self, state_file: Path) -> "Paths":
        return replace(self, state_file=state_file)


def get_paths() -> Paths:
    # src/flip7tracker/paths.py -> parents: [flip7tracker, src, repo_root]
    package_dir = Path(__file__).resolve().parent
    repo_root = package_dir.parents[1]
    data_dir = package_dir / "data"
    schema_dir = data_dir / "schemas"
    userdata_dir = repo_root / "userdata"
    return Paths(
        repo_root=repo_root,
        data_dir=data_dir,
        schema_dir=schema_dir,
        userdata_dir=userdata_dir,
        state_file=userdata_dir / "state.json",
        telemetry_file=userdata_dir / "telemetry.jsonl",
    )
