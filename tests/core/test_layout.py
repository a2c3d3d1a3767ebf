"""Tests for the placement-diagram helpers and square utilities."""

import pytest

from chessmate.core.board import Board
from chessmate.core.enums import Color, PieceKind
from chessmate.core.layout import (
    STARTING_LAYOUT,
    board_from_layout,
    position_from_layout,
    starting_position,
)
from chessmate.core.piece import Piece
from chessmate.core.position import Position
from chessmate.core.types import (
    file_of,
    is_on_board,
    make_square,
    parse_square,
    rank_of,
    square_name,
    to_xy,
)


class TestLayout:
    def test_starting_layout_matches_initial_board(self) -> None:
        assert board_from_layout(STARTING_LAYOUT) == Board.initial()

    def test_starting_position(self) -> None:
        assert starting_position() == Position()

    def test_home_pieces_unmoved(self) -> None:
        board = board_from_layout("r3k2r/8/8/8/8/8/8/R3K2R")
        assert not board[parse_square("a1")].has_moved
        assert not board[parse_square("e8")].has_moved

    def test_displaced_pieces_marked_moved(self) -> None:
        board = board_from_layout("4k3/8/8/8/8/8/8/1R4K1")
        assert board[parse_square("b1")].has_moved
        assert board[parse_square("g1")].has_moved

    def test_wrong_color_on_home_square_is_moved(self) -> None:
        board = board_from_layout("R3k3/8/8/8/8/8/8/4K3")
        assert board[parse_square("a8")] == Piece(Color.WHITE, PieceKind.ROOK, True)

    def test_side_and_en_passant(self) -> None:
        pos = position_from_layout(
            STARTING_LAYOUT, Color.BLACK, en_passant=parse_square("e3")
        )
        assert pos.side_to_move == Color.BLACK
        assert pos.en_passant == parse_square("e3")

    @pytest.mark.parametrize(
        "placement",
        [
            "8/8/8/8/8/8/8",
            "9/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "x7/8/8/8/8/8/8/8",
        ],
    )
    def test_invalid_layout_raises(self, placement: str) -> None:
        with pytest.raises(ValueError):
            board_from_layout(placement)


class TestSquares:
    def test_a1_is_zero(self) -> None:
        assert make_square(0, 0) == 0
        assert make_square(7, 7) == 63

    def test_file_and_rank(self) -> None:
        sq = parse_square("e4")
        assert (file_of(sq), rank_of(sq)) == (4, 3)
        assert to_xy(sq) == (4, 3)

    def test_square_name(self) -> None:
        assert square_name(0) == "a1"
        assert square_name(63) == "h8"

    def test_is_on_board(self) -> None:
        assert is_on_board(0, 0)
        assert is_on_board(7, 7)
        assert not is_on_board(-1, 0)
        assert not is_on_board(0, 8)

    @pytest.mark.parametrize("name", ["", "e", "i1", "a9", "e44"])
    def test_parse_square_rejects_garbage(self, name: str) -> None:
        with pytest.raises(ValueError):
            parse_square(name)
