"""Attack detection by probing outward from the target square."""

from __future__ import annotations

from dojochess.core.board import Board
from dojochess.core.enums import Color, PieceType
from dojochess.core.types import ALL_SQUARES, Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in ALL_SQUARES:
        moves: list[Square] = []
        for dr, dc in offsets:
            target = sq.offset(dr, dc)
            if target is not None:
                moves.append(target)
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            ray: list[Square] = []
            step = sq.offset(dr, dc)
            while step is not None:
                ray.append(step)
                step = step.offset(dr, dc)
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Public API -------------------------------------------------------------


def _has_piece(
    board: Board,
    squares: tuple[Square, ...],
    color: Color,
    piece_type: PieceType,
) -> bool:
    for sq in squares:
        piece = board[sq]
        if (
            piece is not None
            and piece.color == color
            and piece.piece_type == piece_type
        ):
            return True
    return False


def _ray_hits(
    board: Board,
    rays: tuple[tuple[Square, ...], ...],
    color: Color,
    piece_types: tuple[PieceType, ...],
) -> bool:
    for ray in rays:
        for sq in ray:
            piece = board[sq]
            if piece is None:
                continue
            if piece.color == color and piece.piece_type in piece_types:
                return True
            break
    return False


def pawn_attacker_squares(sq: Square, by_color: Color) -> tuple[Square, ...]:
    """Squares from which a pawn of *by_color* would attack *sq*."""
    row = sq.row - by_color.forward
    return tuple(
        Square(row, col) for col in (sq.col - 1, sq.col + 1) if is_on_board(row, col)
    )


def is_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    idx = sq.index

    if _has_piece(board, KNIGHT_TARGETS[idx], by_color, PieceType.KNIGHT):
        return True

    if _ray_hits(board, ROOK_RAYS[idx], by_color, _ORTHOGONAL_SLIDERS):
        return True

    if _ray_hits(board, BISHOP_RAYS[idx], by_color, _DIAGONAL_SLIDERS):
        return True

    if _has_piece(board, pawn_attacker_squares(sq, by_color), by_color, PieceType.PAWN):
        return True

    return _has_piece(board, KING_TARGETS[idx], by_color, PieceType.KING)


def is_king_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_attacked(board, board.king_square(color), color.opposite)
