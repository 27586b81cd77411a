import logging
from fastapi import APIRouter, Depends, Path, Request, Response, status
from myblog.api.deps import get_post_repository, get_search_engine
from myblog.api.errors import remote_address
from myblog.core.exceptions import ValidationError
from myblog.schemas.post import PostCreate, PostUpdate, PostResponse
from myblog.services.posts import PostRepository
from myblog.services.search import SearchEngine
from typing import Annotated, List, Optional

router = APIRouter()

logger = logging.getLogger("fastapi")

# ids are 64-bit integer primary keys
PostId = Annotated[int, Path(ge=1, le=2**63 - 1)]

def log_info(request: Request, message: str, *args):
    logger.info("[%s] - " + message, remote_address(request), *args)

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED, summary="Create a new post")
def create_post(
    post: PostCreate,
    request: Request,
    repository: PostRepository = Depends(get_post_repository)
):
    """Create a new post, creating any tags that do not exist yet"""
    new_post = repository.create(
        title=post.title,
        content=post.content,
        category=post.category,
        tags=post.tags
    )
    log_info(request, "created new post: %s", new_post.id)
    return PostResponse.from_post(new_post)

@router.get("", response_model=List[PostResponse], summary="List all posts, or search them with ?term=")
def list_posts(
    request: Request,
    term: Optional[str] = None,
    repository: PostRepository = Depends(get_post_repository),
    search: SearchEngine = Depends(get_search_engine)
):
    """List all posts

    With `term`, return the posts whose title, content, category or any tag
    contains it (case-insensitive).
    """
    unknown = set(request.query_params) - {"term"}
    if unknown:
        raise ValidationError(f"invalid request made: {request.url.path}?{request.url.query}")

    if term is not None:
        posts = search.search(term)
    else:
        posts = repository.get_all()
    log_info(request, "sending %d posts", len(posts))
    return [PostResponse.from_post(post) for post in posts]

@router.get("/{post_id}", response_model=PostResponse, summary="Get a specific post")
def get_post(
    post_id: PostId,
    repository: PostRepository = Depends(get_post_repository)
):
    """Get a specific post"""
    return PostResponse.from_post(repository.get(post_id))

@router.put("/{post_id}", response_model=PostResponse, summary="Update title, content, category or tags of a post")
def update_post(
    post_id: PostId,
    post_update: PostUpdate,
    request: Request,
    repository: PostRepository = Depends(get_post_repository)
):
    """Update a post

    Only supplied, non-empty fields change. Tags are added to the existing
    ones.
    """
    post = repository.update(
        post_id,
        title=post_update.title,
        content=post_update.content,
        category=post_update.category,
        tags=post_update.tags
    )
    log_info(request, "successfully updated post %s", post_id)
    return PostResponse.from_post(post)

@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a post")
def delete_post(
    post_id: PostId,
    request: Request,
    repository: PostRepository = Depends(get_post_repository)
):
    """Delete a post and its tag associations"""
    repository.delete(post_id)
    log_info(request, "removed post: %s", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
