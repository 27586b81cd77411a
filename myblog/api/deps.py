from fastapi import Depends
from sqlalchemy.orm import Session
from myblog.db.database import get_session
from myblog.services.posts import PostRepository
from myblog.services.search import SearchEngine

def get_post_repository(session: Session = Depends(get_session)) -> PostRepository:
    """Post repository bound to the request's session"""
    return PostRepository(session)

def get_search_engine(session: Session = Depends(get_session)) -> SearchEngine:
    """Search engine bound to the request's session"""
    return SearchEngine(session)
