"""
Pagebound - 连载故事阅读与轻量创作服务
"""

__version__ = "0.3.0"
