from PyQt5.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QPushButton


def build_host_bar(window, parent_layout, host=""):
    """Builds the destination entry + Run button and attaches them to `window`."""

    host_bar = QHBoxLayout()
    window.host_label = QLabel("Host:")
    host_bar.addWidget(window.host_label)

    window.host_entry = QLineEdit(host)
    window.host_entry.setPlaceholderText("type IP or domain")
    window.host_entry.setFixedWidth(200)
    window.host_entry.returnPressed.connect(window.start_session)
    host_bar.addWidget(window.host_entry)

    window.run_btn = QPushButton("Run")
    window.run_btn.clicked.connect(window.start_session)
    host_bar.addWidget(window.run_btn)
    host_bar.addStretch()

    parent_layout.addLayout(host_bar)


def lock_host_bar(window):
    """Starting is one-shot: once running, the entry and button go away."""
    window.run_btn.hide()
    window.host_entry.setEnabled(False)
    window.host_entry.hide()
    window.host_label.hide()
