from rest_framework.throttling import SimpleRateThrottle

class AuthRequestThrottle(SimpleRateThrottle):
    # rate comes from REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['auth']
    scope = 'auth'

    def get_cache_key(self, request, view):
        ip_addr = self.get_ident(request)

        # narrow the bucket to the submitted email when there is one
        email = request.data.get('email') if hasattr(request.data, 'get') else None
        if email:
            return self.cache_format % {
                'scope': self.scope,
                'ident': f'{ip_addr}:{str(email).lower()}'
            }

        return self.cache_format % {
            'scope': self.scope,
            'ident': ip_addr
        }
