"""REST surface for subject votes, comments and reports."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from electivas.api import schemas
from electivas.api.deps import get_catalog, get_identity, get_service
from electivas.catalog.client import CatalogClient
from electivas.domain.identity import IdentitySignals
from electivas.domain.service import ReviewService
from electivas.infra import cookies

router = APIRouter(prefix="/subjects")


@router.get("", response_model=List[schemas.SubjectSummaryOut])
async def list_subjects(
	service: ReviewService = Depends(get_service),
	catalog: CatalogClient = Depends(get_catalog),
) -> List[schemas.SubjectSummaryOut]:
	rows: List[schemas.SubjectSummaryOut] = []
	for subject in await catalog.get_electivas():
		tally = await service.tally(subject.subject_id)
		rows.append(
			schemas.SubjectSummaryOut(
				subject=subject,
				likes=tally.likes,
				dislikes=tally.dislikes,
				visible_comment_count=await service.visible_comment_count(subject.subject_id),
			)
		)
	return rows


@router.get("/{subject_id}", response_model=schemas.SubjectDetailOut)
async def subject_detail(
	subject_id: str,
	request: Request,
	identity: IdentitySignals = Depends(get_identity),
	service: ReviewService = Depends(get_service),
	catalog: CatalogClient = Depends(get_catalog),
) -> schemas.SubjectDetailOut:
	subject = await catalog.get_subject_by_id(subject_id)
	tally = await service.tally(subject_id)
	visible: List[schemas.CommentOut] = []
	hidden: List[schemas.CommentOut] = []
	for comment in await service.list_comments(subject_id):
		row = schemas.CommentOut.from_comment(
			comment,
			user_liked=cookies.read_comment_liked(request, comment.id),
		)
		(hidden if comment.hidden else visible).append(row)
	return schemas.SubjectDetailOut(
		subject=subject,
		subject_id=subject_id,
		likes=tally.likes,
		dislikes=tally.dislikes,
		user_vote=await service.current_vote(subject_id, identity),
		comments=visible,
		hidden_comments=hidden,
		visible_comment_count=await service.visible_comment_count(subject_id),
	)


@router.get("/{subject_id}/votes", response_model=schemas.TallyOut)
async def subject_votes(subject_id: str, service: ReviewService = Depends(get_service)) -> schemas.TallyOut:
	return schemas.TallyOut.from_tally(await service.tally(subject_id))


@router.post("/{subject_id}/vote", response_model=schemas.VoteOut)
async def vote(
	subject_id: str,
	payload: schemas.VoteIn,
	response: Response,
	identity: IdentitySignals = Depends(get_identity),
	service: ReviewService = Depends(get_service),
) -> schemas.VoteOut:
	result = await service.vote(subject_id, payload.vote, identity)
	cookies.write_subject_vote(response, subject_id, result.vote)
	return schemas.VoteOut.from_result(result)


@router.post("/{subject_id}/comments", response_model=schemas.CommentOut, status_code=status.HTTP_201_CREATED)
async def add_comment(
	subject_id: str,
	payload: schemas.CommentIn,
	identity: IdentitySignals = Depends(get_identity),
	service: ReviewService = Depends(get_service),
) -> schemas.CommentOut:
	comment = await service.add_comment(subject_id, payload.text, identity)
	return schemas.CommentOut.from_comment(comment)


@router.post("/{subject_id}/comments/{comment_id}/like", response_model=schemas.CommentLikeOut)
async def like_comment(
	subject_id: str,
	comment_id: str,
	request: Request,
	response: Response,
	identity: IdentitySignals = Depends(get_identity),
	service: ReviewService = Depends(get_service),
) -> schemas.CommentLikeOut:
	result = await service.toggle_comment_like(
		subject_id,
		comment_id,
		identity,
		already_liked=cookies.read_comment_liked(request, comment_id),
	)
	cookies.write_comment_liked(response, comment_id, result.liked)
	return schemas.CommentLikeOut.from_result(result)


@router.post("/{subject_id}/comments/{comment_id}/report", response_model=schemas.ReportOut)
async def report_comment(
	subject_id: str,
	comment_id: str,
	identity: IdentitySignals = Depends(get_identity),
	service: ReviewService = Depends(get_service),
) -> schemas.ReportOut:
	result = await service.report_comment(subject_id, comment_id, identity)
	return schemas.ReportOut.from_result(result)
