# agent_admin/api/deps.py
from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from agent_admin.common.clock import Clock, get_clock
from agent_admin.storage.db import get_session

# ----- Annotated aliases -----
DB = Annotated[Session, Depends(get_session)]
Now = Annotated[Clock, Depends(get_clock)]
