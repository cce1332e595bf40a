"""
Domain Constants: 뷰 엔진 전역 상수.

디렉터리 규약, 파일 확장자, 설정 기본값 등.
"""

# =============================================================================
# Template Directory Structure (템플릿 디렉터리 구조)
# =============================================================================
# <root>/
# ├── <layout>.html            # 레이아웃 (1개 이상)
# ├── partials/*.html          # 선택, 모든 뷰에 공유
# └── views/<layout_base>/     # 레이아웃마다 필수
#     └── *.html

TEMPLATE_SUFFIX = ".html"
PARTIALS_DIR = "partials"
VIEWS_DIR = "views"

# view key 구분자: "<layout_base>/<view.html>"
VIEW_KEY_SEPARATOR = "/"

# =============================================================================
# Render Context (렌더 컨텍스트 변수명)
# =============================================================================
# 템플릿에서 사용 가능한 이름:
# - data: 호출자가 넘긴 값 (그대로)
# - view: 현재 뷰의 템플릿 이름 → 레이아웃에서 {% include view %}
# - layout: 현재 레이아웃의 템플릿 이름
# - view_key: "<layout_base>/<view.html>"

CONTEXT_DATA = "data"
CONTEXT_VIEW = "view"
CONTEXT_LAYOUT = "layout"
CONTEXT_VIEW_KEY = "view_key"

# =============================================================================
# Config Defaults (설정 기본값)
# =============================================================================

DEFAULT_TEMPLATE_ROOT = "templates"
DEFAULT_CSRF_FIELD_NAME = "csrf"

# yaml 설정 파일에서 엔진 설정이 들어있는 섹션
CONFIG_SECTION = "engine"
