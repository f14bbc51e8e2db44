"""
Streamlit User Interface - Design Inspiration Explorer

Search form for the design inspiration API. Users enter a design query and
optional filters and get back AI design recommendations, a color palette,
related terms and image results grouped by category.

Features:
- Design filters (industry, font, color, style, audience, purpose)
- Optional AI-generated images and design platform results
- Images grouped by result category
- Backend connectivity status monitoring
"""

import asyncio
import os
from collections import OrderedDict
from typing import Optional

import httpx
import streamlit as st

API_URL = os.getenv("DESIGN_API_URL", "http://localhost:8000")

st.set_page_config(
    page_title="Design Inspiration Explorer",
    page_icon="🎨",
    layout="wide"
)

st.title("🎨 Design Inspiration Explorer")
st.markdown("Find images, palettes, fonts and layout ideas for any design brief.")

if "last_result" not in st.session_state:
    st.session_state.last_result = None


async def search_designs(params: dict) -> Optional[dict]:
    """Call backend API to aggregate design inspiration."""
    async with httpx.AsyncClient(timeout=120.0) as client:
        try:
            response = await client.get(f"{API_URL}/search", params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            is_json = e.response.headers.get("content-type", "").startswith("application/json")
            body = e.response.json() if is_json else {"error": e.response.text}

            # Show user-friendly error for validation errors (400)
            if e.response.status_code == 400:
                st.error(body.get("error", "Invalid request"))
                return None

            # Show detailed error for server errors (500)
            st.error(f"API Error: {e.response.status_code} - {body.get('error', '')}")
            with st.expander("Show error details"):
                st.code(body.get("details") or e.response.text)
            return None
        except httpx.TimeoutException:
            st.error("Request timed out. Some providers may be slow, please try again.")
            return None
        except httpx.HTTPError as e:
            st.error(f"Connection Error: {str(e)}")
            st.info(f"Make sure the backend is running at {API_URL}")
            return None


def group_by_category(images: list) -> "OrderedDict[str, list]":
    """Group images by category, keeping the order the API returned."""
    groups: "OrderedDict[str, list]" = OrderedDict()
    for image in images:
        groups.setdefault(image.get("category") or "Other", []).append(image)
    return groups


def render_palette(colors: list) -> None:
    if not colors:
        return
    st.subheader("Color Palette")
    columns = st.columns(len(colors))
    for column, color in zip(columns, colors):
        column.markdown(
            f"<div style='background:{color};height:64px;border-radius:8px'></div>",
            unsafe_allow_html=True,
        )
        column.caption(color)


def render_result(result: dict) -> None:
    st.header(result.get("heading", "Design Recommendations"))
    render_palette(result.get("colorPalette", []))

    if result.get("relatedTerms"):
        st.caption("Related: " + " · ".join(result["relatedTerms"]))

    with st.expander("💡 AI Design Suggestions", expanded=True):
        st.markdown(result.get("aiSuggestions", ""))

    if result.get("fontPairings"):
        st.subheader("Font Pairings")
        for pairing in result["fontPairings"]:
            st.markdown(f"**{pairing['headlineFont']}** + {pairing['bodyFont']} - {pairing['style']}")

    if result.get("layoutSuggestions"):
        st.subheader("Layout Ideas")
        for layout in result["layoutSuggestions"]:
            st.markdown(f"**{layout['name']}**: {layout['description']}")

    for category, images in group_by_category(result.get("images", [])).items():
        st.subheader(f"{category} ({len(images)})")
        columns = st.columns(4)
        for index, image in enumerate(images):
            with columns[index % 4]:
                st.image(image["imageUrl"], use_container_width=True)
                caption = f"{image.get('title', '')} · {image.get('sourceName', '')}"
                if image.get("isPremium"):
                    caption += " · Premium"
                st.caption(caption)
                if image.get("originUrl"):
                    st.markdown(f"[Open source]({image['originUrl']})")


with st.form("search"):
    query = st.text_input("Design query", placeholder="e.g. coffee shop logo")
    col1, col2, col3 = st.columns(3)
    industry = col1.text_input("Industry", placeholder="tech, fashion, food...")
    font = col2.text_input("Font", placeholder="serif, Montserrat...")
    color = col3.text_input("Color", placeholder="#FF5733 or blue")
    design_style = col1.text_input("Design style", placeholder="minimalist, retro...")
    audience = col2.text_input("Audience", placeholder="young professionals")
    purpose = col3.text_input("Purpose", placeholder="website hero, packaging...")
    ai_images = col1.checkbox("Generate AI images")
    platforms = col2.checkbox("Include design platforms")
    sort_by = col3.selectbox("Sort by", ["provider order", "relevance", "source"])
    submitted = st.form_submit_button("🔍 Search")

if submitted:
    params = {
        "q": query,
        "industry": industry,
        "font": font,
        "color": color,
        "designStyle": design_style,
        "audience": audience,
        "purpose": purpose,
        "ai": str(ai_images).lower(),
        "platforms": str(platforms).lower(),
    }
    if sort_by != "provider order":
        params["sortBy"] = sort_by
    params = {key: value for key, value in params.items() if value}

    with st.spinner("🔍 Searching providers and generating recommendations..."):
        st.session_state.last_result = asyncio.run(search_designs(params))

if st.session_state.last_result:
    render_result(st.session_state.last_result)

st.sidebar.markdown("### 📖 How to Use")
st.sidebar.markdown("""
1. Describe what you are designing
2. Add any filters you care about
3. Browse images grouped by category
4. Reuse the palette and font pairings

**Example Inputs:**
- "coffee shop logo" + industry "food"
- "fintech landing page" + style "minimalist"
- "music festival poster" + color "#FF5733"
""")

st.sidebar.markdown("---")
st.sidebar.markdown("### ⚙️ System Status")
try:
    response = httpx.get(f"{API_URL}/health", timeout=2.0)
    if response.status_code == 200:
        st.sidebar.success("✅ Backend Online")
    else:
        st.sidebar.error("❌ Backend Error")
except httpx.HTTPError:
    st.sidebar.error("❌ Backend Offline")
    st.sidebar.code("uv run uvicorn backend.main:app --reload", language="bash")
