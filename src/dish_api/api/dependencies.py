"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends

from dish_api.core.config import Settings, get_settings
from dish_api.services.dish_recognition import RecognitionPipeline, get_recognition_pipeline


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]
PipelineDep = Annotated[RecognitionPipeline, Depends(get_recognition_pipeline)]
