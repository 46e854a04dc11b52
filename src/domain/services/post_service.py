"""Post service layer with business logic."""

from typing import Callable, Optional

from domain.address import Address
from domain.entities.group import Group
from domain.entities.post import Post, post_address
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.authority import AuthorityChain
from domain.services.operation import Operation, OperationStage
from domain.services.sequencer import next_index
from domain.services.validation import validate_uri


class PostService:
    """Service layer for root posts and replies."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get(self, address: Address) -> Post:
        """Get a post by address."""
        async with self._uow_factory() as uow:
            return await uow.records.get_post(address)

    async def get_child(self, parent: Address, index: int) -> Post:
        """Get the ``index``-th post under a group, or reply under a post."""
        async with self._uow_factory() as uow:
            return await uow.records.get_post(post_address(parent, index))

    async def create_post(
        self,
        group_address: Address,
        author_address: Address,
        metadata_uri: str,
        proven: Address,
        payer: Optional[Address] = None,
    ) -> Post:
        """Publish a root post into a group."""
        with Operation(
            "create_post", group=str(group_address), author=str(author_address)
        ) as op:
            async with self._uow_factory() as uow:
                group = await uow.records.get_group(group_address, for_update=True)
                return await self._create_child(
                    uow, op, group, author_address, metadata_uri, proven, payer
                )

    async def create_reply(
        self,
        parent_address: Address,
        author_address: Address,
        metadata_uri: str,
        proven: Address,
        payer: Optional[Address] = None,
    ) -> Post:
        """Reply to an existing post. The reply is numbered under its parent."""
        with Operation(
            "create_reply", parent=str(parent_address), author=str(author_address)
        ) as op:
            async with self._uow_factory() as uow:
                parent = await uow.records.get_post(parent_address, for_update=True)
                return await self._create_child(
                    uow, op, parent, author_address, metadata_uri, proven, payer
                )

    async def update(
        self,
        address: Address,
        metadata_uri: str,
        proven: Address,
    ) -> Post:
        """Replace a post's metadata URI. Requires the author's authority."""
        with Operation("update_post", post=str(address)) as op:
            async with self._uow_factory() as uow:
                post = await uow.records.get_post(address, for_update=True)
                await AuthorityChain(uow.records).require(post, proven)
                op.advance(OperationStage.AUTHORITY_VERIFIED)

                validate_uri(metadata_uri, "metadata uri", required=True)
                op.advance(OperationStage.VALIDATED)

                post.metadata_uri = metadata_uri
                await uow.records.save(post)
                await uow.commit()
                op.advance(OperationStage.APPLIED)
                return post

    # --- Internal helpers ---

    async def _create_child(
        self,
        uow: IUnitOfWork,
        op: Operation,
        parent: Group | Post,
        author_address: Address,
        metadata_uri: str,
        proven: Address,
        payer: Optional[Address],
    ) -> Post:
        """Number a new post under ``parent`` and store both."""
        author = await uow.records.get_profile(author_address)
        await AuthorityChain(uow.records).require(author, proven)
        op.advance(OperationStage.AUTHORITY_VERIFIED)

        validate_uri(metadata_uri, "metadata uri", required=True)
        op.advance(OperationStage.VALIDATED)

        index, _ = next_index(parent)
        post = Post(
            group=parent.address,
            index=index,
            author=author.address,
            metadata_uri=metadata_uri,
            parent_post=parent.address if isinstance(parent, Post) else None,
        )
        await uow.records.create(post, payer or proven)
        await uow.records.save(parent)

        await uow.commit()
        op.advance(OperationStage.APPLIED)
        return post
