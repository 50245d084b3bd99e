import logging

import pytz
import requests
from django.http import HttpResponse, HttpResponseRedirect
from django.views import View

from .oauth import get_oauth_flow
from .models import CalendarToken

logger = logging.getLogger(__name__)

USERINFO_URL = 'https://www.googleapis.com/oauth2/v3/userinfo'


class CalendarAuthStartView(View):
    """
    GET /calendar/auth/start/
    Redirects to Google OAuth, keeping the CSRF state in the session.
    """

    def get(self, request):
        redirect_uri = request.build_absolute_uri('/calendar/auth/callback/')
        flow = get_oauth_flow(redirect_uri=redirect_uri)
        auth_url, state = flow.authorization_url(
            access_type='offline',
            include_granted_scopes='true',
            prompt='consent',
        )
        request.session['oauth_state'] = state
        return HttpResponseRedirect(auth_url)


class CalendarAuthCallbackView(View):
    """
    GET /calendar/auth/callback/
    Handles the OAuth2 code, stores tokens in CalendarToken.
    """

    def get(self, request):
        error = request.GET.get('error')
        if error:
            logger.warning('OAuth callback received error: %s', error)
            return HttpResponse(
                '<h1>Authorization failed</h1>'
                f'<p>Google returned an error: <code>{error}</code></p>',
                content_type='text/html',
                status=400,
            )

        # CSRF state validation
        returned_state = request.GET.get('state', '')
        expected_state = request.session.get('oauth_state', '')
        if not returned_state or returned_state != expected_state:
            return HttpResponse('Invalid state parameter.', status=400)

        redirect_uri = request.build_absolute_uri('/calendar/auth/callback/')
        flow = get_oauth_flow(redirect_uri=redirect_uri)

        try:
            flow.fetch_token(code=request.GET.get('code'))
        except Exception as e:
            logger.warning('OAuth token exchange failed: %s', e)
            return HttpResponse(f'OAuth error: {e}', status=400)

        creds = flow.credentials

        token_expiry = None
        if creds.expiry:
            token_expiry = creds.expiry.replace(tzinfo=pytz.UTC)

        userinfo_response = requests.get(
            USERINFO_URL,
            headers={'Authorization': f'Bearer {creds.token}'},
            timeout=10,
        )
        email = userinfo_response.json().get('email', '') if userinfo_response.ok else ''
        if not email:
            logger.warning('Could not fetch Google userinfo: status=%s', userinfo_response.status_code)
            return HttpResponse('Could not determine the Google account email.', status=400)

        CalendarToken.objects.update_or_create(
            account_email=email,
            defaults={
                'access_token': creds.token,
                'refresh_token': creds.refresh_token or '',
                'token_expiry': token_expiry,
            },
        )
        logger.info('Connected Google Calendar for %s', email)

        request.session.pop('oauth_state', None)

        return HttpResponse(
            f'<h1>Connected!</h1><p>Google Calendar for {email} is ready to warp.</p>',
            content_type='text/html',
        )
