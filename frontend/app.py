# frontend/app.py

import os
import sys

# Make project root importable so we can import frontend.*
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd
import plotly.express as px
import requests
import streamlit as st

from frontend.client import AdvisorClient
from frontend.formatting import (
    SORT_OPTIONS,
    airline_type_label,
    bar_label,
    format_score,
    route_airline_name,
    score_band,
)

# ----------------------- Streamlit Page Config -----------------------

st.set_page_config(
    page_title="Air Route Advisor",
    page_icon="✈️",
    layout="wide",
)

SCORE_BAND_ICONS = {"excellent": "🟢", "good": "🟡", "average": "🟠"}
CHART_ROUTES = 8


@st.cache_resource
def get_client() -> AdvisorClient:
    return AdvisorClient()


def plot_config():
    return {"displaylogo": False, "scrollZoom": False}


def select_destination(code: str):
    # Runs as a widget callback, before the sidebar selectbox is rebuilt
    st.session_state["destination"] = code


# ----------------------- Sections -----------------------


def stats_section(client: AdvisorClient):
    try:
        stats = client.stats()
    except requests.exceptions.RequestException as e:
        st.warning(f"Statistics unavailable: {e}")
        return

    cols = st.columns(5)
    cols[0].metric("Routes", stats["totalRoutes"])
    cols[1].metric("Avg Safety", format_score(stats["avgSafetyScore"]))
    cols[2].metric("Avg Comfort", format_score(stats["avgComfortScore"]))
    cols[3].metric("Avg Composite", format_score(stats["avgCompositeScore"]))
    cols[4].metric("On-Time Rate", f"{stats['onTimeRate']}%")


def popular_section(client: AdvisorClient):
    try:
        popular = client.popular_destinations(top_n=5)
    except requests.exceptions.RequestException:
        return
    if not popular:
        return

    st.subheader("Popular Destinations")
    cols = st.columns(len(popular))
    for col, dest in zip(cols, popular):
        with col:
            st.markdown(f"**{dest['city']}**")
            st.caption(dest["airport_name"])
            st.write(f"✈️ {dest['flight_count']}  🏢 {dest['airline_count']}")
            st.write(f"Score: {format_score(dest.get('composite_score'))}")
            st.button("Search", key=f"popular-{dest['code']}",
                      on_click=select_destination, args=(dest["code"],))


def route_card(route: dict, index: int):
    with st.container(border=True):
        st.markdown(f"**{route_airline_name(route)}** · {airline_type_label(route.get('airline_type'))}")
        st.caption(f"{route.get('city_name') or route.get('city_zh', '')} - {route.get('airport_name', '')}")

        cols = st.columns(3)
        for col, (label, key) in zip(cols, [("Composite", "composite_score"),
                                            ("Safety", "safety_score"),
                                            ("Comfort", "comfort_score")]):
            value = route.get(key)
            col.metric(f"{SCORE_BAND_ICONS[score_band(value)]} {label}", format_score(value))

        daily = route.get("daily_avg_flights") or 0
        st.write(f"✈️ {route.get('flight_count') or 0} flights · 📅 {daily:.1f} flights/day")
        if st.button("View Details", key=f"details-{index}"):
            st.session_state["detail"] = (route["airline_code"], route["destination_code"])


def score_chart(routes: list, key: str, label: str):
    rows = routes[:CHART_ROUTES]
    df = pd.DataFrame({
        "airline": [bar_label(route_airline_name(r)) for r in rows],
        key: [r.get(key) or 0 for r in rows],
    })
    max_value = max([100] + df[key].tolist())
    fig = px.bar(
        df,
        x=key,
        y="airline",
        orientation="h",
        title=label,
        range_x=[0, max_value],
        labels={key: label, "airline": "Airline"},
    )
    fig.update_yaxes(autorange="reversed")
    st.plotly_chart(fig, use_container_width=True, config=plot_config())


def airport_section(client: AdvisorClient, code: str):
    try:
        details = client.airport_detail(code)
    except requests.exceptions.RequestException:
        return

    airport = details["airport"]
    with st.expander(f"🛬 {airport['city']} - {airport['name']}", expanded=False):
        cols = st.columns(2)
        cols[0].metric("Routes", details["routes"])
        cols[1].metric("Airlines", details["airlines"])
        weather = details.get("recentWeather") or []
        if weather:
            columns = ["weather_date", "weather_desc", "avg_temp", "precipitation", "wind_speed", "risk_level"]
            st.dataframe(pd.DataFrame(weather).reindex(columns=columns), hide_index=True)


def detail_section(client: AdvisorClient, airline_code: str, destination_code: str):
    try:
        details = client.route_detail(airline_code, destination_code)
    except requests.exceptions.RequestException:
        st.error("Unable to load route details")
        return

    route = details["route"]
    airline = details.get("airline") or {}
    weather = details.get("weatherData")

    st.subheader(f"{airline.get('airline_name_en') or route.get('airline_name')} → {route.get('airport_name')}")
    info, scores, sky = st.columns(3)
    with info:
        st.markdown("**📊 Route Information**")
        st.write(f"Airline type: {airline_type_label(route.get('airline_type'))}")
        st.write(f"Total flights: {route.get('flight_count')}")
        st.write(f"Daily average: {format_score(route.get('daily_avg_flights'))} flights/day")
    with scores:
        st.markdown("**⭐ Score Details**")
        st.write(f"Composite: {format_score(route.get('composite_score'))}")
        st.write(f"Safety: {format_score(route.get('safety_score'))}")
        st.write(f"Comfort: {format_score(route.get('comfort_score'))}")
        st.write(f"On-time rate: {details['onTimeRate']}%")
        st.write(f"Average delay: {details['avgDelay']:.1f} minutes")
    if weather:
        with sky:
            st.markdown("**🌤️ Weather Information**")
            st.write(f"Weather: {weather.get('weather_desc')}")
            st.write(f"Temperature: {weather.get('avg_temp')}°C")
            st.write(f"Precipitation: {weather.get('precipitation')}mm")
            st.write(f"Wind speed: {weather.get('wind_speed')} km/h")
            st.write(f"Risk level: {weather.get('risk_level')}")

    monthly = details.get("monthlyData") or []
    if monthly:
        trend = pd.DataFrame(monthly)[["month", "composite_score"]].sort_values("month")
        fig = px.bar(trend, x="month", y="composite_score", title="Monthly Score Trend")
        st.plotly_chart(fig, use_container_width=True, config=plot_config())


# ----------------------- Page -----------------------

client = get_client()

st.title("✈️ Air Route Advisor")
stats_section(client)

destinations = client.destinations()
codes = [""] + [d["code"] for d in destinations]
labels = {d["code"]: f"{d['city']} - {d['name']}" for d in destinations}

try:
    months = client.months()
except requests.exceptions.RequestException:
    months = []
month_labels = {m["id"]: m["name"] for m in months}

with st.sidebar:
    st.header("Filters")
    destination = st.selectbox(
        "Destination",
        codes,
        key="destination",
        format_func=lambda c: labels.get(c, "Select destination"),
    )
    month = st.selectbox(
        "Month",
        [None] + list(month_labels),
        format_func=lambda m: month_labels.get(m, "All months"),
    )
    sort_label = st.selectbox("Sort by", list(SORT_OPTIONS))

popular_section(client)

if not destination:
    st.info('Please select filters to search routes')
else:
    airport_section(client, destination)

    try:
        routes = client.search_routes(destination, month=month, sort=SORT_OPTIONS[sort_label])
    except requests.exceptions.RequestException:
        st.error("❌ Search failed. Please check network connection and backend service.")
        routes = None

    if routes is not None and not routes:
        st.info("📭 No routes found matching criteria. Try a different destination or month.")
    elif routes:
        grid = st.columns(3)
        for i, route in enumerate(routes):
            with grid[i % 3]:
                route_card(route, i)

        left, right = st.columns(2)
        with left:
            score_chart(routes, "safety_score", "Safety Score")
        with right:
            score_chart(routes, "comfort_score", "Comfort Score")

if "detail" in st.session_state:
    detail_section(client, *st.session_state["detail"])
