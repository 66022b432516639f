import glob
import os


def get_input_paths(patterns: list[str]) -> list[str]:
  """Expand glob patterns, keeping first-seen order and dropping duplicates."""
  seen: dict[str, None] = {}
  for pattern in patterns:
    for path in sorted(glob.glob(pattern)):
      seen.setdefault(os.path.normpath(path))
  return list(seen)

def read_transmission(path: str) -> str:
  with open(path, "r") as f:
    return f.read().strip()
