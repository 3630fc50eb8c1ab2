"""Tale service: ownership and visibility rules over the tale repository."""

import asyncio
import time
import uuid
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...config.llm import get_inference_model_name
from ...core.modules.tale_generator import TaleGenerator
from ...core.types import TaleRequest
from ..database.repository import TaleRepository
from ..logging import tale_logger
from ..models.requests import CreateTaleRequest, GenerateTaleRequest, UpdateTaleRequest
from ..models.responses import GeneratedTaleResponse, TaleResponse
from .exceptions import Forbidden, GenerationFailed, NotFound, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)
Fields = Union[Mapping[str, Any], BaseModel]


def _format_errors(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into one readable message."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)


def validate_fields(model: Type[ModelT], fields: Fields) -> ModelT:
    """Validate raw fields against a request model, raising ValidationError."""
    if isinstance(fields, BaseModel):
        fields = fields.model_dump(exclude_unset=True)
    try:
        return model.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError(_format_errors(e)) from e


def _column_values(request: BaseModel) -> dict[str, Any]:
    """Dump only the fields that were sent, with enums as their stored values."""
    return request.model_dump(mode="json", exclude_unset=True, by_alias=False)


class TaleService:
    """Service for creating, reading, changing and liking tales."""

    def __init__(self, repo: TaleRepository, generator: Optional[TaleGenerator] = None):
        self.repo = repo
        self._generator = generator

    async def create(self, author: str, fields: Fields) -> TaleResponse:
        """Validate and save a new tale owned by ``author``. New tales are private by default."""
        request = validate_fields(CreateTaleRequest, fields)

        tale = await self.repo.create_tale(
            tale_id=str(uuid.uuid4()),
            title=request.title,
            content=request.content,
            age_range=request.age_range.value,
            topic=request.topic.value,
            author=author,
            is_public=request.is_public,
        )
        tale_logger.tale_created(tale.id, author)
        return tale

    async def list_public(self) -> list[TaleResponse]:
        """All public tales, newest first."""
        return await self.repo.list_public_tales()

    async def list_for_user(self, author: str) -> list[TaleResponse]:
        """All tales owned by ``author``, newest first."""
        return await self.repo.list_tales_by_author(author)

    async def get_by_id(self, tale_id: str, requester: Optional[str] = None) -> TaleResponse:
        """
        Get a tale the requester is allowed to see.

        Raises:
            NotFound: no tale with this id
            Forbidden: the tale is private and requester is not its author
        """
        tale = await self.repo.get_tale(tale_id)
        if tale is None:
            raise NotFound()

        if not tale.is_public and tale.author != requester:
            tale_logger.access_denied(tale_id, requester, "view")
            raise Forbidden("Not authorized to access this tale")

        return tale

    async def _get_owned(self, tale_id: str, requester: str, action: str) -> TaleResponse:
        tale = await self.repo.get_tale(tale_id)
        if tale is None:
            raise NotFound()

        if tale.author != requester:
            tale_logger.access_denied(tale_id, requester, action)
            raise Forbidden(f"Not authorized to {action} this tale")

        return tale

    async def update(self, tale_id: str, requester: str, patch: Fields) -> TaleResponse:
        """
        Apply a partial update. Only the author may update a tale.

        The patch is validated like a new tale; the author, likes and
        timestamps cannot be patched.
        """
        tale = await self._get_owned(tale_id, requester, "update")
        request = validate_fields(UpdateTaleRequest, patch)

        changes = _column_values(request)
        if not changes:
            return tale

        updated = await self.repo.update_tale(tale_id, requester, changes)
        if updated is None:
            # Deleted between the ownership check and the update
            raise NotFound()

        tale_logger.tale_updated(tale_id, requester, sorted(changes))
        return updated

    async def delete(self, tale_id: str, requester: str) -> None:
        """Permanently delete a tale. Only the author may delete it."""
        await self._get_owned(tale_id, requester, "delete")

        if not await self.repo.delete_tale(tale_id, requester):
            raise NotFound()

        tale_logger.tale_deleted(tale_id, requester)

    async def toggle_like(self, tale_id: str, requester: str) -> tuple[bool, int]:
        """
        Like the tale if the requester doesn't yet, otherwise unlike it.

        Returns:
            (liked, likes) after the toggle

        Raises:
            NotFound: no tale with this id
            Forbidden: the tale is private
        """
        result = await self.repo.toggle_like(tale_id, requester)
        if result is None:
            # Work out why the atomic update matched nothing
            if await self.repo.get_tale(tale_id) is None:
                raise NotFound()
            tale_logger.access_denied(tale_id, requester, "like")
            raise Forbidden("Cannot like a private tale")

        liked, likes = result
        tale_logger.like_toggled(tale_id, requester, liked, likes)
        return liked, likes

    async def check_like_status(self, tale_id: str, requester: str) -> bool:
        """Whether the requester currently likes the tale."""
        liked = await self.repo.is_liked_by(tale_id, requester)
        if liked is None:
            raise NotFound()
        return liked

    async def generate(self, fields: Fields) -> GeneratedTaleResponse:
        """
        Ask the narrative generator for a tale draft. Nothing is saved.

        Raises:
            ValidationError: age range or topic missing or not recognised
            GenerationFailed: the LM call failed or returned nothing usable
        """
        request = validate_fields(GenerateTaleRequest, fields)
        tale_request = TaleRequest(
            age_range=request.age_range.value,
            topic=request.topic.value,
            main_character=request.main_character or None,
            setting=request.setting or None,
            additional_details=request.additional_details or None,
        )

        start_time = time.time()
        tale_logger.generation_started(
            tale_request.age_range, tale_request.topic, get_inference_model_name()
        )

        try:
            generator = self._generator or self._build_generator()
            # The LM call blocks; keep the event loop free
            generated = await asyncio.to_thread(generator, tale_request)
        except Exception as e:
            tale_logger.generation_failed(e, time.time() - start_time)
            raise GenerationFailed(f"Error generating tale: {e}") from e

        tale_logger.generation_completed(generated.title, time.time() - start_time)

        return GeneratedTaleResponse(
            title=generated.title,
            content=generated.content,
            age_range=request.age_range,
            topic=request.topic,
        )

    @staticmethod
    def _build_generator() -> TaleGenerator:
        # Import here to avoid loading LM configuration at import time
        from ...config.llm import get_inference_lm

        return TaleGenerator(lm=get_inference_lm())
