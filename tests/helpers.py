"""Shared builders for test payloads."""


def make_pr_event(action='opened', branch='main', body='', login='alice', merged=False, label=None, number=7):
    """Build a minimal GitHub pull_request event payload."""
    payload = {
        'action': action,
        'number': number,
        'pull_request': {
            'number': number,
            'title': 'Fix the widget',
            'body': body,
            'html_url': f'https://github.com/acme/widgets/pull/{number}',
            'head': {'ref': branch},
            'user': {'login': login},
            'labels': [],
            'merged': merged,
        },
        'repository': {'name': 'widgets', 'owner': {'login': 'acme'}},
    }
    if label is not None:
        payload['label'] = {'name': label}
        payload['pull_request']['labels'].append({'name': label})
    return payload
