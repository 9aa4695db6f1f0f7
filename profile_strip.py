#!/usr/bin/env python3
"""Profile bindstrip to find performance bottlenecks."""

import cProfile
import io
import pstats

from bindstrip import strip_text

ITEM = """        <TextView
            android:id="@+id/name"
            android:text="@{user.name, default=&quot;Bob&quot;}"
            android:visibility="@{user.visible ? View.VISIBLE : View.GONE}"/>
        <include layout="@layout/row" app:user="@{user}"/>
"""

# Sample layout
layout = f"""<?xml version="1.0" encoding="utf-8"?>
<layout xmlns:android="http://schemas.android.com/apk/res/android"
        xmlns:app="http://schemas.android.com/apk/res-auto">
    <data>
        <variable name="user" type="com.example.User"/>
    </data>
    <LinearLayout android:orientation="vertical">
{ITEM * 200}    </LinearLayout>
</layout>
"""

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    result = strip_text(layout)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
