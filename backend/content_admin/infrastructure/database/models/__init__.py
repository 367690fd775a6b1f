from .content_models import (
    CategoryModel,
    ContentTableMixin,
    ExerciseModel,
    MusicModel,
    PlaylistModel,
    ProgramModel,
    SoundModel,
    TemplateModel,
    UserModel,
    WorkoutModel,
)
from .op_log import OpLogModel

__all__ = [
    "CategoryModel",
    "ContentTableMixin",
    "ExerciseModel",
    "MusicModel",
    "PlaylistModel",
    "ProgramModel",
    "SoundModel",
    "TemplateModel",
    "UserModel",
    "WorkoutModel",
    "OpLogModel",
]
