from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    url_for,
)
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash

from acme_dashboard import limiter
from acme_dashboard.forms import LoginForm
from acme_dashboard.models import User
from acme_dashboard.utils.activity import log_activity

auth = Blueprint("auth", __name__)


@auth.route("/")
def index():
    """Send visitors to the dashboard or the login page."""
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.overview"))
    return redirect(url_for("auth.login"))


@auth.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute")
def login():
    """Authenticate a user and start their session."""
    if current_user.is_authenticated:
        return redirect(url_for("dashboard.overview"))

    form = LoginForm()
    if form.validate_on_submit():
        email = form.email.data
        password = form.password.data

        user = User.query.filter_by(email=email).first()

        if not user or not check_password_hash(user.password, password):
            flash("Invalid credentials.", "danger")
            return redirect(url_for("auth.login"))
        elif not user.active:
            flash("Please contact system admin to activate account.", "warning")
            return redirect(url_for("auth.login"))

        login_user(user)
        log_activity("Logged in", user.id)
        current_app.logger.info("User %s logged in", user.id)
        return redirect(url_for("dashboard.overview"))

    return render_template(
        "auth/login.html", form=form, demo=current_app.config["DEMO"]
    )


@auth.route("/logout")
@login_required
def logout():
    """Log the current user out."""
    log_activity("Logged out")
    logout_user()
    return redirect(url_for("auth.login"))
