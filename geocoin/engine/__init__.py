"""Game session: movement, coin transfer, save and load."""

from geocoin.engine.save import GameSave, decode_save, encode_save
from geocoin.engine.session import GameSession

__all__ = ["GameSave", "GameSession", "decode_save", "encode_save"]
