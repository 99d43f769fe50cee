from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

load_dotenv()

TITLE_ENV = "ODOCINDEX_TITLE"
BRANCH_ENV = "ODOCINDEX_BRANCH"
CLASS_DIR_ENV = "ODOCINDEX_CLASS_DIR"
LINK_TARGET_ENV = "ODOCINDEX_LINK_TARGET"


@dataclass(frozen=True)
class PageConfig:
    title: str = "odocgen"
    branch: str | None = None
    class_dir: str = "class"
    link_target: str = "_blank"

    @classmethod
    def from_env(cls) -> "PageConfig":
        return cls(
            title=os.getenv(TITLE_ENV) or cls.title,
            branch=os.getenv(BRANCH_ENV) or None,
            class_dir=(os.getenv(CLASS_DIR_ENV) or cls.class_dir).rstrip("/"),
            link_target=os.getenv(LINK_TARGET_ENV) or cls.link_target,
        )

    def with_overrides(self, **overrides) -> "PageConfig":
        """Return a copy with every non-None override applied."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        if "class_dir" in applied:
            applied["class_dir"] = applied["class_dir"].rstrip("/")
        return replace(self, **applied)

    @property
    def page_title(self) -> str:
        if self.branch:
            return f"{self.title} [{self.branch}]"
        return self.title


__all__ = ["PageConfig"]
