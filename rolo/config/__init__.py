from rolo.config.settings import RoloSettings, get_settings

__all__ = ["RoloSettings", "get_settings"]
