from datetime import date
import traceback

import pandas as pd
import streamlit as st

from fridagar import get_all_days, workdays_from_date


def get_days_df(year: int, month: int | None=None) -> pd.DataFrame:
    days = get_all_days(year, month)
    return pd.DataFrame({
        'Dagsetning': [d.date.strftime('%Y-%m-%d') for d in days],
        'Heiti': [d.description for d in days],
        'Lykill': [d.key.value for d in days],
        'Frídagur': ['Hálfur' if d.half_day else ('Já' if d.holiday else 'Nei') for d in days],
    })

def show_page():
    st.title('Frídagar og merkisdagar')
    try:
        st.write("Dæmi:")
        st.markdown("""
```python
from datetime import date
from fridagar import get_holidays, is_holiday, workdays_from_date

holidays = get_holidays(2024)
next_workday: date = workdays_from_date(1)
christmas = is_holiday(date(2024, 12, 25))
```
""")
        year = st.number_input('Ár:', value=date.today().year, min_value=1583, max_value=9998, step=1)
        month = st.selectbox('Mánuður:', [None] + list(range(1, 13)))
        if st.button('Reikna daga'):
            st.table(get_days_df(int(year), month))

        workdays = st.number_input('Fjöldi virkra daga:', value=10, step=1)
        ref_date = st.date_input('Frá:', value=date.today())
        include_half_days = st.checkbox('Telja hálfa frídaga sem virka daga')
        if st.button('Reikna virkan dag'):
            result = workdays_from_date(int(workdays), ref_date, include_half_days)
            st.write(f'{int(workdays)} virkir dagar frá {ref_date}: {result.strftime("%Y-%m-%d")}')
    except Exception as e:
        st.exception(e)
        st.exception(f'{traceback.format_exc()}')
