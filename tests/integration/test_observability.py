"""
Integration tests for metrics and CLI commands.
"""

from vyaapar.models import User, UserRole


def test_metrics_endpoint(client, ready_cart, auth_headers, salesperson):
    headers = auth_headers(salesperson)
    assert client.post('/cart/checkout', headers=headers).status_code == 201

    response = client.get('/metrics')
    text = response.get_data(as_text=True)

    assert response.status_code == 200
    assert 'orders_created_total{source="cart"}' in text
    assert 'http_requests_total' in text


def test_unknown_route_is_json(client, session):
    response = client.get('/nowhere')
    assert response.status_code == 404
    assert response.get_json() == {'status': 'error', 'message': 'Not Found'}


def test_seed_is_idempotent(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed'])
    assert result.exit_code == 0
    assert 'created' in result.output

    result = runner.invoke(args=['seed'])
    assert result.exit_code == 0
    assert 'already exists' in result.output

    admins = session.query(User).filter_by(login_id=app.config['SEED_ADMIN_LOGIN_ID']).all()
    assert len(admins) == 1
    assert admins[0].role == UserRole.SUPER_ADMIN


def test_create_user_command(app, session):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        'create-user', '--login-id', 'dist-9', '--email', 'dist9@test.com',
        '--password', 'password123', '--role', 'DISTRIBUTOR', '--name', 'Dist Nine'
    ])

    assert result.exit_code == 0
    user = session.query(User).filter_by(login_id='dist-9').one()
    assert user.role == UserRole.DISTRIBUTOR
