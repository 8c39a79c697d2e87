import html
import logging
from contextlib import contextmanager
from typing import List, Optional

import streamlit as st

from exhibits.controller import ChangeSort, Controller, NextPage, PrevPage, Search, ShowView, ToggleDetail, View
from exhibits.data import load_app_data, total_count_label
from exhibits.facets import year_options
from exhibits.filters import MatchMode, describe_criteria, normalize_criteria
from exhibits.presenter import SORT_LABELS, PageView, SortKey
from exhibits.records import Record

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

NO_RESULTS_MESSAGE = "該当する展覧会は見つかりませんでした。"


# ---------- UI / layout helpers ----------
def inject_base_styles():
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e7e5e4;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #78716c;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #292524;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #292524;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f5f5f4;border: 1px solid #e7e5e4;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #44403c;}
        .row-year {font-weight: 700;color: #a8a29e;}
        .row-title {font-weight: 700;color: #292524;}
        .row-meta {font-size: 0.85rem;color: #78716c;}
        .detail-label {font-weight: 700;color: #78716c;font-size: 0.75rem;margin-bottom: 2px;}
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str):
    container = st.container(border=True)
    container.markdown(f"<div class='card-title'>{title}</div>", unsafe_allow_html=True)
    with container:
        yield container


def render_page_header(title: str, breadcrumb: str, chips: Optional[List[str]] = None):
    st.markdown(
        f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
        unsafe_allow_html=True,
    )
    if chips:
        chip_html = "".join([f"<span class='chip'>{html.escape(txt)}</span>" for txt in chips])
        st.markdown(f"<div class='chip-row'>{chip_html}</div>", unsafe_allow_html=True)


# ---------- Controller wiring ----------
def get_controller() -> Controller:
    controller = st.session_state.get("controller")
    if controller is None:
        controller = Controller.from_data(load_app_data())
        st.session_state["controller"] = controller
    return controller


def submit_search():
    raw = {
        "keyword": st.session_state.get("keyword", ""),
        "mode": st.session_state.get("mode", MatchMode.AND),
        "prefecture": st.session_state.get("prefecture", ""),
        "year_start": st.session_state.get("year_start"),
        "year_end": st.session_state.get("year_end"),
    }
    get_controller().dispatch(Search(normalize_criteria(raw)))


def change_sort():
    get_controller().dispatch(ChangeSort(SortKey(st.session_state["sort_key"])))


def format_year(value: Optional[int]) -> str:
    return "指定なし" if value is None else f"{value}年"


# ---------- UI setup ----------
st.set_page_config(page_title="ミュシャ展覧会データベース", layout="wide")
inject_base_styles()
controller = get_controller()
state = controller.state

st.title("ミュシャ展覧会データベース")
if state.load_error:
    st.error(total_count_label({"error": state.load_error}))
else:
    st.caption(total_count_label({"total_count": len(state.records)}))

# ----- Sidebar: navigation + filters -----
with st.sidebar:
    st.markdown("### メニュー")
    nav_cols = st.columns(2)
    nav_cols[0].button("ホーム", on_click=controller.dispatch, args=(ShowView(View.HOME),))
    nav_cols[1].button("このDBについて", on_click=controller.dispatch, args=(ShowView(View.ABOUT),))

    st.markdown("---")
    st.markdown("### 検索条件")
    with st.form("search-form"):
        st.text_input("キーワード", key="keyword", placeholder="例: ミュシャ 版画")
        st.radio(
            "検索方法",
            options=[MatchMode.AND, MatchMode.OR],
            format_func=lambda m: "すべて含む (AND)" if m is MatchMode.AND else "いずれか含む (OR)",
            key="mode",
            horizontal=True,
        )
        pref_options = [""] + [pref for _, prefs in state.facets for pref in prefs]
        pref_region = {pref: region for region, prefs in state.facets for pref in prefs}
        st.selectbox(
            "都道府県",
            options=pref_options,
            format_func=lambda p: f"{pref_region[p]} / {p}" if p else "すべて",
            key="prefecture",
        )
        years: List[Optional[int]] = [None] + year_options(state.year_bounds)
        year_cols = st.columns(2)
        year_cols[0].selectbox("開始年", options=years, format_func=format_year, key="year_start")
        year_cols[1].selectbox("終了年", options=years, format_func=format_year, key="year_end")
        st.form_submit_button("検索", on_click=submit_search)


# ----- Page renderers -----
def render_record(record: Record, expanded: bool):
    with st.container(border=True):
        cols = st.columns([1, 4, 3, 2, 2, 1])
        cols[0].markdown(f"<span class='row-year'>{html.escape(record.year)}</span>", unsafe_allow_html=True)
        cols[1].markdown(f"<span class='row-title'>{html.escape(record.title)}</span>", unsafe_allow_html=True)
        cols[2].markdown(f"<span class='row-meta'>{html.escape(record.venue)}</span>", unsafe_allow_html=True)
        cols[3].markdown(f"<span class='row-meta'>{html.escape(record.date_range)}</span>", unsafe_allow_html=True)
        cols[4].markdown(f"<span class='chip'>{html.escape(record.tour_simple_display)}</span>", unsafe_allow_html=True)
        cols[5].button(
            "▲" if expanded else "▼",
            key=f"toggle-{record.record_id}",
            on_click=controller.dispatch,
            args=(ToggleDetail(record.record_id),),
        )
        if not expanded:
            return
        left, right = st.columns(2)
        with left:
            st.markdown("<div class='detail-label'>巡回情報（詳細）</div>", unsafe_allow_html=True)
            st.write(record.tour_detailed_display)
            st.markdown("<div class='detail-label'>主催・後援・協賛</div>", unsafe_allow_html=True)
            st.text(record.organizers_display)
        with right:
            st.markdown("<div class='detail-label'>カタログ情報</div>", unsafe_allow_html=True)
            st.markdown(f"<span class='chip'>有無: {html.escape(record.catalog_status)}</span>", unsafe_allow_html=True)
            st.text(record.catalog_detail_display)
            st.markdown("<div class='detail-label'>備考</div>", unsafe_allow_html=True)
            st.write(record.remarks_display)
            if record.reference_display:
                st.markdown("<div class='detail-label'>参照</div>", unsafe_allow_html=True)
                st.caption(record.reference_display)


def render_pagination(view: PageView):
    if not view.show_pagination:
        return
    cols = st.columns([1, 2, 1])
    cols[0].button("前へ", on_click=controller.dispatch, args=(PrevPage(),), disabled=not view.has_prev)
    cols[1].markdown(
        f"<div style='text-align:center;'>{view.page} / {view.total_pages}</div>",
        unsafe_allow_html=True,
    )
    cols[2].button("次へ", on_click=controller.dispatch, args=(NextPage(),), disabled=not view.has_next)


def render_home_page():
    render_page_header("ホーム", "Home")
    st.write("左の検索条件を指定して「検索」を押すと、該当する展覧会の一覧が表示されます。")
    if state.year_bounds is not None:
        lo, hi = state.year_bounds
        st.caption(f"収録期間: {lo}年～{hi}年 / 都道府県数: {sum(len(p) for _, p in state.facets)}")


def render_result_page():
    render_page_header("検索結果", "Home / 検索結果", describe_criteria(state.criteria))
    view = controller.page_view

    top = st.columns([4, 2])
    if not view.is_empty:
        top[0].markdown(f"全 **{view.total_count}** 件中 {view.range_start}～{view.range_end} 件を表示")
    top[1].selectbox(
        "並び替え",
        options=list(SortKey),
        index=list(SortKey).index(state.sort_key),
        format_func=SORT_LABELS.get,
        key="sort_key",
        on_change=change_sort,
    )

    if view.is_empty:
        st.info(NO_RESULTS_MESSAGE)
    else:
        for record in view.records():
            render_record(record, record.record_id in state.expanded)
        render_pagination(view)

    st.button("戻る", on_click=controller.dispatch, args=(ShowView(View.HOME),))


def render_about_page():
    render_page_header("このデータベースについて", "Home / About")
    about = controller.about
    charts = about.get("charts", {})
    if not charts:
        st.info("グラフを表示するデータがありません。")
    else:
        chart_cols = st.columns(2)
        with chart_cols[0]:
            with card("開催頻度の推移"):
                st.vega_lite_chart(charts["period_trend"])
        with chart_cols[1]:
            with card("地方別の開催数"):
                st.vega_lite_chart(charts["region_share"])
    st.button("戻る", key="about-back", on_click=controller.dispatch, args=(ShowView(View.HOME),))


if state.view is View.RESULT:
    render_result_page()
elif state.view is View.ABOUT:
    render_about_page()
else:
    render_home_page()
