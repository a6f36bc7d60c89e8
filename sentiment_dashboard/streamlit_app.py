import streamlit as st
import requests
import pandas as pd
import os
import json
import plotly.express as px
import plotly.graph_objects as go
from datetime import datetime

from sentiment_dashboard.ui import api_error_detail, fetch_export, result_card_html

# Page configuration
st.set_page_config(
    page_title="Sentiment Dashboard",
    page_icon="🧠",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .sentiment-positive { color: #10b981; font-weight: bold; }
    .sentiment-negative { color: #ef4444; font-weight: bold; }
    .sentiment-neutral { color: #f59e0b; font-weight: bold; }
    .stTabs [data-baseweb="tab-list"] {
        gap: 24px;
    }
</style>
""", unsafe_allow_html=True)

SENTIMENT_COLORS = {"POSITIVE": "#10b981", "NEUTRAL": "#f59e0b", "NEGATIVE": "#ef4444"}
SENTIMENT_EMOJI = {"POSITIVE": "😊", "NEUTRAL": "😐", "NEGATIVE": "😞"}

SAMPLES = {
    "Positive": "This product is absolutely amazing! Best purchase ever.\nThe support team was very helpful and quick to respond.\nI love how easy and reliable the new dashboard is.",
    "Negative": "Terrible experience, very disappointing.\nThe app is slow and buggy, a total failure.\nCustomer service was rude and unprofessional.",
    "Mixed": "The design is beautiful but the setup was confusing.\nDelivery was late, although the quality is good.\nThe meeting is scheduled for Tuesday afternoon.",
}

# Get API base URL from environment or use default
DEFAULT_API_BASE = os.getenv("API_BASE_URL", "http://localhost:8080")

# Sidebar configuration
st.sidebar.title("⚙️ Configuration")
API_BASE = st.sidebar.text_input("API Base URL", DEFAULT_API_BASE)

try:
    health_resp = requests.get(f"{API_BASE}/health", timeout=5)
    if health_resp.ok:
        st.sidebar.success("✅ API Connected")
    else:
        st.sidebar.error("❌ API Error")
except requests.exceptions.RequestException:
    st.sidebar.error("❌ API Unreachable")

st.sidebar.markdown("---")
st.sidebar.markdown("### 📊 Display Options")
show_keywords = st.sidebar.checkbox("Show Keywords", value=True)
show_explanations = st.sidebar.checkbox("Show Explanations", value=True)
show_scores = st.sidebar.checkbox("Show Score Breakdown", value=False)

st.title("🧠 Sentiment Dashboard")
st.markdown("Analyze typed or uploaded text for sentiment, explore the results and export them")

tab1, tab2, tab3, tab4 = st.tabs(["📝 Text Analysis", "📊 Visualizations", "🕘 History", "💬 Assistant"])

if "analysis_data" not in st.session_state:
    st.session_state.analysis_data = None
if "input_text" not in st.session_state:
    st.session_state.input_text = ""
if "chat_messages" not in st.session_state:
    st.session_state.chat_messages = []


def run_analysis(texts):
    with st.spinner(f"Analyzing {len(texts)} texts..."):
        try:
            resp = requests.post(f"{API_BASE}/api/v1/analyze", json={"texts": texts}, timeout=30)
            if resp.ok:
                st.session_state.analysis_data = resp.json()
                st.success(f"✅ Analyzed {len(st.session_state.analysis_data['results'])} texts!")
            else:
                st.error(f"API error: {resp.status_code} - {api_error_detail(resp)}")
        except requests.exceptions.ConnectionError:
            st.error("Cannot connect to API. Is the server running?")
        except requests.exceptions.RequestException as e:
            st.error(f"Request failed: {e}")


def results_frame(results) -> pd.DataFrame:
    return pd.DataFrame([{
        "#": i + 1,
        "sentiment": r["sentiment"],
        "confidence": r["confidence"],
        "positive": r["scores"]["positive"],
        "negative": r["scores"]["negative"],
        "neutral": r["scores"]["neutral"],
        "keywords": ", ".join(r["keywords"]),
        "text": r["text"][:50] + "..." if len(r["text"]) > 50 else r["text"],
    } for i, r in enumerate(results)])


# ==================== TAB 1: TEXT ANALYSIS ====================
with tab1:
    st.header("📝 Analyze Texts")

    col1, col2 = st.columns([2, 1])

    with col2:
        st.markdown("### 📂 Upload a File")
        uploaded = st.file_uploader(
            "TXT, CSV, JSON, PDF, DOCX, XLSX or XLS (max 10MB)",
            type=["txt", "csv", "json", "pdf", "docx", "xlsx", "xls"],
        )
        if uploaded is not None and st.button("📥 Load Texts from File"):
            with st.spinner(f"Extracting text from {uploaded.name}..."):
                try:
                    resp = requests.post(
                        f"{API_BASE}/api/v1/extract",
                        files={"file": (uploaded.name, uploaded.getvalue())},
                        timeout=60,
                    )
                    if resp.ok:
                        data = resp.json()
                        st.session_state.input_text = "\n".join(data["fragments"])
                        st.success(f"✅ Loaded {len(data['fragments'])} texts from {data['filename']}")
                        if data.get("warning"):
                            st.warning(data["warning"])
                    else:
                        st.error(api_error_detail(resp))
                except requests.exceptions.RequestException as e:
                    st.error(f"Upload failed: {e}")

        st.markdown("### 💡 Sample Texts")
        for label, sample in SAMPLES.items():
            if st.button(f"Load {label} Samples"):
                st.session_state.input_text = sample

    with col1:
        st.text_area(
            "Enter texts (one per line)",
            key="input_text",
            placeholder="Enter your texts here...\nEach line will be analyzed separately.",
            height=260,
            help="Enter multiple texts, each on a new line"
        )

    if st.button("🔍 Analyze Texts", type="primary", use_container_width=True):
        texts = [x.strip() for x in st.session_state.input_text.split("\n") if x.strip()]
        if texts:
            run_analysis(texts)
        else:
            st.warning("Please enter some text to analyze")

    if st.session_state.analysis_data:
        data = st.session_state.analysis_data
        summary = data["summary"]
        dist = summary["sentiment_distribution"]

        st.markdown("---")
        st.subheader("📊 Analysis Results")

        col1, col2, col3, col4, col5 = st.columns(5)
        with col1:
            st.metric("Total Texts", summary["total_texts"])
        with col2:
            st.metric("😊 Positive", dist["positive"])
        with col3:
            st.metric("😐 Neutral", dist["neutral"])
        with col4:
            st.metric("😞 Negative", dist["negative"])
        with col5:
            st.metric("Avg. Confidence", f"{summary['average_confidence'] * 100:.1f}%")

        if st.button("🧹 Clear Results"):
            st.session_state.analysis_data = None
            st.rerun()

        st.markdown("### 📋 Detailed Results")
        for i, item in enumerate(data["results"], start=1):
            sentiment = item["sentiment"]
            color = SENTIMENT_COLORS[sentiment]
            with st.container():
                st.markdown(
                    result_card_html(item, i, color, SENTIMENT_EMOJI[sentiment]),
                    unsafe_allow_html=True,
                )
                if show_keywords and item["keywords"]:
                    st.markdown("🏷️ Keywords: " + ", ".join(f"**{k}**" for k in item["keywords"]))
                if show_explanations:
                    st.caption(item["explanation"])
                if show_scores:
                    s = item["scores"]
                    st.caption(
                        f"positive {s['positive']:.3f} · negative {s['negative']:.3f} · neutral {s['neutral']:.3f}"
                    )

# ==================== TAB 2: VISUALIZATIONS ====================
with tab2:
    st.header("📊 Sentiment Visualizations")

    if st.session_state.analysis_data and st.session_state.analysis_data["results"]:
        data = st.session_state.analysis_data
        summary = data["summary"]
        df = results_frame(data["results"])

        col1, col2 = st.columns(2)

        with col1:
            st.subheader("🥧 Sentiment Distribution")
            dist = summary["sentiment_distribution"]
            fig_pie = px.pie(
                values=[dist["positive"], dist["neutral"], dist["negative"]],
                names=["POSITIVE", "NEUTRAL", "NEGATIVE"],
                color=["POSITIVE", "NEUTRAL", "NEGATIVE"],
                color_discrete_map=SENTIMENT_COLORS,
                hole=0.4
            )
            fig_pie.update_layout(
                showlegend=True,
                legend=dict(orientation="h", yanchor="bottom", y=-0.2)
            )
            st.plotly_chart(fig_pie, use_container_width=True)

        with col2:
            st.subheader("📊 Confidence per Text")
            fig_bar = px.bar(
                df,
                x="#",
                y="confidence",
                color="sentiment",
                color_discrete_map=SENTIMENT_COLORS,
                hover_data=["text"],
                labels={"confidence": "Confidence", "#": "Text"}
            )
            fig_bar.update_layout(yaxis_range=[0, 1])
            st.plotly_chart(fig_bar, use_container_width=True)

        st.subheader("📈 Score Breakdown")
        score_df = df.melt(
            id_vars=["#"], value_vars=["positive", "negative", "neutral"],
            var_name="class", value_name="score"
        )
        fig_stack = px.bar(
            score_df,
            x="#",
            y="score",
            color="class",
            color_discrete_map={"positive": "#10b981", "neutral": "#f59e0b", "negative": "#ef4444"},
            labels={"score": "Score", "#": "Text"}
        )
        st.plotly_chart(fig_stack, use_container_width=True)

        st.subheader("🎯 Average Confidence")
        avg = summary["average_confidence"]
        fig_gauge = go.Figure(go.Indicator(
            mode="gauge+number",
            value=avg * 100,
            number={"suffix": "%"},
            domain={'x': [0, 1], 'y': [0, 1]},
            gauge={
                'axis': {'range': [0, 100]},
                'bar': {'color': "darkblue"},
                'steps': [
                    {'range': [0, 60], 'color': '#e5e7eb'},
                    {'range': [60, 80], 'color': '#93c5fd'},
                    {'range': [80, 100], 'color': '#3b82f6'}
                ],
            }
        ))
        fig_gauge.update_layout(height=300)
        st.plotly_chart(fig_gauge, use_container_width=True)

        st.subheader("📋 Data Table")
        st.dataframe(df, use_container_width=True)

        st.subheader("📥 Export")
        analysis_json = json.dumps(data, sort_keys=True)
        export_cols = st.columns(3)
        for col, (fmt, label, mime) in zip(export_cols, [
            ("csv", "Download CSV", "text/csv"),
            ("json", "Download JSON", "application/json"),
            ("report", "Download Report", "text/plain"),
        ]):
            with col:
                try:
                    content = fetch_export(API_BASE, fmt, analysis_json)
                except requests.exceptions.RequestException as e:
                    st.error(f"Export failed: {e}")
                    continue
                ext = "txt" if fmt == "report" else fmt
                st.download_button(
                    label=f"📥 {label}",
                    data=content,
                    file_name=f"sentiment_analysis_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{ext}",
                    mime=mime,
                    key=f"export_{fmt}",
                )
    else:
        st.info("👆 Analyze some texts first to see visualizations")

# ==================== TAB 3: HISTORY ====================
with tab3:
    st.header("🕘 Analysis History")
    st.caption("The 10 most recent analyses are kept while the API is running.")

    try:
        hresp = requests.get(f"{API_BASE}/api/v1/history", timeout=10)
        history = hresp.json() if hresp.ok else []
    except requests.exceptions.RequestException:
        history = []
        st.error("Cannot load history. Is the server running?")

    if history:
        for entry in history:
            summary = entry["analysis"]["summary"]
            dist = summary["sentiment_distribution"]
            col1, col2 = st.columns([4, 1])
            with col1:
                st.markdown(
                    f"**{entry['name']}** · {summary['total_texts']} texts · "
                    f"😊 {dist['positive']} · 😐 {dist['neutral']} · 😞 {dist['negative']}"
                )
            with col2:
                if st.button("Load", key=f"load_{entry['id']}"):
                    st.session_state.analysis_data = entry["analysis"]
                    st.success(f"Loaded {entry['name']}")
        if st.button("🗑️ Clear History"):
            requests.delete(f"{API_BASE}/api/v1/history", timeout=10)
            st.rerun()
    else:
        st.info("No analyses yet.")

# ==================== TAB 4: ASSISTANT ====================
with tab4:
    st.header("💬 Response Assistant")

    try:
        sresp = requests.get(f"{API_BASE}/api/v1/chat/suggestions", timeout=10)
        suggestions = sresp.json() if sresp.ok else {}
    except requests.exceptions.RequestException:
        suggestions = {}

    if not st.session_state.chat_messages and suggestions.get("greeting"):
        st.session_state.chat_messages.append({"role": "assistant", "content": suggestions["greeting"]})

    for message in st.session_state.chat_messages:
        with st.chat_message(message["role"]):
            st.markdown(message["content"].replace("\n", "  \n"))

    if suggestions.get("questions"):
        st.caption("Try: " + " · ".join(suggestions["questions"]))

    prompt = st.chat_input("Ask about the results...")
    if prompt:
        st.session_state.chat_messages.append({"role": "user", "content": prompt})
        results = (st.session_state.analysis_data or {}).get("results", [])
        try:
            cresp = requests.post(
                f"{API_BASE}/api/v1/chat",
                json={"message": prompt, "results": results},
                timeout=10,
            )
            answer = cresp.json()["reply"] if cresp.ok else f"API error: {cresp.status_code}"
        except requests.exceptions.RequestException as e:
            answer = f"Request failed: {e}"
        st.session_state.chat_messages.append({"role": "assistant", "content": answer})
        st.rerun()

# Footer
st.markdown("---")
st.markdown(
    """
    <div style="text-align: center; color: #666;">
        <p>Sentiment Dashboard | Built with FastAPI and Streamlit</p>
    </div>
    """,
    unsafe_allow_html=True
)
