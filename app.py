"""贷款后台管理 Dashboard - 主入口"""
import logging

import streamlit as st

from config.settings import PAGE_TITLE, PAGE_ICON, LAYOUT, REPAYMENT_PERIOD_DAYS
from utils.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
    initial_sidebar_state="expanded",
)

st.title(f"{PAGE_ICON} {PAGE_TITLE}")

st.markdown(f"""
贷款后台计算工具：放款测算、还款计划、还款分配、逾期与风险评估。

### 功能导航

| 页面 | 功能 |
|------|------|
| 🧮 **放款计算** | 计算到手金额、每期还款、利润，生成还款计划 |
| 💳 **还款处理** | 按 费用→利息→本金→预收 分配还款，判断结清 |
| ⚠️ **逾期评估** | 逾期天数、罚息、风险等级、催收建议、信用评分 |
| ⚖️ **模式对比** | 模式1（利息前置）vs 模式2（等额分期） |
| 📊 **逾期统计** | 上传逾期贷款 CSV，查看分段统计与风险分布 |

---

### 贷款模式

- **模式1**: 有抵押，每期按固定比例还本，全额利息在第一期收取
- **模式2**: 等额分期，本金与利息平均分摊到每期
- **还款周期**: 每 {REPAYMENT_PERIOD_DAYS} 天一期；有抵押金时最后追加一行退还抵押金
""")

with st.sidebar:
    st.markdown("### 关于")
    st.markdown("贷款后台管理 Dashboard v1.0")
    st.markdown("计算结果不落库，由业务系统负责持久化")
