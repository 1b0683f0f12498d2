"""
HTML pages for the directory: the public listing and the admin panel.

Both pages are static shells; their inline scripts talk to the JSON API on the
same origin. Nothing secret is embedded: the admin page sends whatever key the
operator types to /api/admin/verify and lets the server decide.
"""

SHARED_CSS = """
    :root {
        --bg: #f8fafc;
        --card: #ffffff;
        --border: #e2e8f0;
        --text: #1e293b;
        --muted: #64748b;
        --accent: #047857;
        --danger: #dc2626;
        --star: #f59e0b;
    }

    * { margin: 0; padding: 0; box-sizing: border-box; }

    body {
        font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
        background: var(--bg);
        color: var(--text);
        min-height: 100vh;
    }

    header {
        background: var(--accent);
        color: #fff;
        padding: 18px 32px;
        display: flex; justify-content: space-between; align-items: center;
    }
    header a { color: #fff; text-decoration: none; font-weight: 600; }
    main { max-width: 1100px; margin: 0 auto; padding: 28px 20px; }

    .card {
        background: var(--card);
        border: 1px solid var(--border);
        border-radius: 12px;
        padding: 20px;
    }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(300px, 1fr)); gap: 18px; }
    .card h2 { font-size: 18px; margin-bottom: 6px; }
    .card p { font-size: 14px; color: var(--muted); margin-bottom: 4px; }
    .stars { color: var(--star); font-size: 18px; letter-spacing: 2px; }
    .stars span { cursor: pointer; }

    .btn {
        background: var(--accent); color: #fff; border: none;
        padding: 10px 18px; border-radius: 8px; font-weight: 600;
        cursor: pointer; font-family: inherit;
    }
    .btn-ghost { background: transparent; color: var(--accent); border: 1px solid var(--accent); }
    .btn-danger { background: var(--danger); }

    input, textarea {
        width: 100%; padding: 10px 12px; margin-bottom: 10px;
        border: 1px solid var(--border); border-radius: 8px; font-family: inherit;
    }

    .hidden { display: none; }
    .error { color: var(--danger); margin: 10px 0; }

    .modal {
        position: fixed; inset: 0; background: rgba(15,23,42,0.5);
        display: flex; justify-content: center; align-items: center;
    }
    .modal.hidden { display: none; }
    .modal .card { width: 100%; max-width: 440px; }
"""

COMMON_SCRIPT = """
    const API_BASE_URL = '/api';

    function escapeHtml(value) {
        const div = document.createElement('div');
        div.textContent = value == null ? '' : String(value);
        return div.innerHTML;
    }

    function starStrip(rating) {
        const filled = rating ? Math.max(0, Math.min(5, Math.round(rating))) : 0;
        return '★'.repeat(filled) + '☆'.repeat(5 - filled);
    }

    async function callApi(method, path, body) {
        const options = { method, headers: { 'Content-Type': 'application/json' } };
        if (body !== undefined) options.body = JSON.stringify(body);
        const response = await fetch(API_BASE_URL + path, options);
        let data = null;
        try { data = await response.json(); } catch (e) { data = null; }
        return { ok: response.ok, status: response.status, data };
    }
"""

DIRECTORY_SCRIPT = """
    let businesses = [];
    let selectedBusiness = null;
    let reviewRating = 0;

    const grid = document.getElementById('businessGrid');
    const searchInput = document.getElementById('searchInput');
    const listMessage = document.getElementById('listMessage');

    function matches(business, query) {
        return ['name', 'category', 'location'].some(
            key => String(business[key] || '').toLowerCase().includes(query)
        );
    }

    function renderBusinesses() {
        const query = searchInput.value.trim().toLowerCase();
        const visible = query ? businesses.filter(b => matches(b, query)) : businesses;
        grid.innerHTML = '';
        listMessage.textContent = visible.length ? '' : 'No businesses found.';
        visible.forEach(business => {
            const card = document.createElement('div');
            card.className = 'card';
            card.innerHTML = `
                <h2>${escapeHtml(business.name)}</h2>
                <p>${escapeHtml(business.category)} - ${escapeHtml(business.location)}</p>
                <p>${escapeHtml(business.description)}</p>
                ${business.phone ? `<p>Phone: ${escapeHtml(business.phone)}</p>` : ''}
                ${business.hours ? `<p>Hours: ${escapeHtml(business.hours)}</p>` : ''}
                <div class="stars">${starStrip(business.rating)}</div>
                <button class="btn btn-ghost" data-id="${business.id}">Leave a Review</button>
            `;
            card.querySelector('button').addEventListener('click', () => openReview(business));
            grid.appendChild(card);
        });
    }

    async function loadBusinesses() {
        const result = await callApi('GET', '/businesses');
        if (!result.ok) {
            listMessage.textContent = (result.data && result.data.message) || 'Error loading businesses.';
            return;
        }
        businesses = result.data;
        renderBusinesses();
    }

    function updateStars() {
        const container = document.getElementById('ratingStars');
        container.innerHTML = '';
        for (let i = 1; i <= 5; i++) {
            const star = document.createElement('span');
            star.textContent = i <= reviewRating ? '★' : '☆';
            star.addEventListener('click', () => { reviewRating = i; updateStars(); });
            container.appendChild(star);
        }
    }

    function openReview(business) {
        selectedBusiness = business;
        reviewRating = 0;
        document.getElementById('reviewTitle').textContent = `Review ${business.name}`;
        document.getElementById('reviewError').textContent = '';
        document.getElementById('reviewModal').classList.remove('hidden');
        updateStars();
    }

    document.getElementById('submitReview').addEventListener('click', async () => {
        const result = await callApi('POST', '/reviews', {
            businessId: selectedBusiness.id,
            reviewerName: document.getElementById('reviewerName').value.trim(),
            text: document.getElementById('reviewText').value.trim(),
            rating: reviewRating,
        });
        if (!result.ok) {
            document.getElementById('reviewError').textContent =
                (result.data && result.data.message) || 'Error adding review.';
            return;
        }
        document.getElementById('reviewModal').classList.add('hidden');
        await loadBusinesses();
    });

    document.getElementById('cancelReview').addEventListener('click', () => {
        document.getElementById('reviewModal').classList.add('hidden');
    });

    document.getElementById('toggleFormBtn').addEventListener('click', () => {
        document.getElementById('addFormContainer').classList.toggle('hidden');
    });

    document.getElementById('submitBiz').addEventListener('click', async () => {
        const value = id => document.getElementById(id).value.trim();
        const result = await callApi('POST', '/businesses', {
            name: value('bizName'),
            category: value('bizCategory'),
            location: value('bizLocation'),
            description: value('bizDescription'),
            phone: value('bizPhone') || null,
            hours: value('bizHours') || null,
        });
        const message = document.getElementById('formMessage');
        message.textContent = (result.data && result.data.message) || '';
        if (result.ok) {
            document.getElementById('addFormContainer').classList.add('hidden');
            await loadBusinesses();
        }
    });

    searchInput.addEventListener('input', renderBusinesses);
    loadBusinesses();
"""

ADMIN_SCRIPT = """
    const keyInput = document.getElementById('adminKeyInput');
    const keyPrompt = document.getElementById('adminKeyPrompt');
    const adminMessage = document.getElementById('adminMessage');
    const list = document.getElementById('businessList');
    let adminKey = null;

    function showError(message) {
        adminMessage.textContent = message;
        adminMessage.className = 'error';
        keyPrompt.classList.remove('hidden');
        list.classList.add('hidden');
    }

    function renderAdminBusinesses(businesses) {
        list.innerHTML = '';
        if (businesses.length === 0) {
            list.innerHTML = '<p>No businesses found in the directory.</p>';
            return;
        }
        businesses.forEach(business => {
            const card = document.createElement('div');
            card.className = 'card';
            card.innerHTML = `
                <h2>${escapeHtml(business.name)}</h2>
                <p>Category: ${escapeHtml(business.category)}</p>
                <p>Location: ${escapeHtml(business.location)}</p>
                <p>${escapeHtml((business.description || '').substring(0, 80))}</p>
                <button class="btn btn-danger">Delete</button>
            `;
            card.querySelector('button').addEventListener('click', () => deleteBusiness(business));
            list.appendChild(card);
        });
    }

    async function loadBusinesses() {
        adminMessage.textContent = 'Loading businesses...';
        adminMessage.className = '';
        const result = await callApi('GET', '/businesses');
        if (!result.ok) {
            showError('Error loading businesses. Please try again.');
            return;
        }
        renderAdminBusinesses(result.data);
        adminMessage.textContent = '';
        keyPrompt.classList.add('hidden');
        list.classList.remove('hidden');
    }

    async function deleteBusiness(business) {
        if (!confirm(`Delete "${business.name}"? This action cannot be undone.`)) return;
        const result = await callApi('DELETE', `/businesses/${business.id}`, { adminKey });
        if (result.status === 403) {
            adminKey = null;
            showError((result.data && result.data.message) || 'Unauthorized: Invalid admin key.');
            return;
        }
        alert((result.data && result.data.message) || 'Failed to delete business.');
        if (result.ok) await loadBusinesses();
    }

    document.getElementById('submitAdminKey').addEventListener('click', async () => {
        const enteredKey = keyInput.value.trim();
        const result = await callApi('POST', '/admin/verify', { adminKey: enteredKey });
        if (!result.ok) {
            showError((result.data && result.data.message) || 'Invalid Admin Key.');
            return;
        }
        adminKey = enteredKey;
        await loadBusinesses();
    });
"""


def render_directory_page() -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Local Business Directory</title>
    <style>{SHARED_CSS}</style>
</head>
<body>
    <header>
        <a href="/">Local Business Directory</a>
        <button id="toggleFormBtn" class="btn btn-ghost" style="color:#fff;border-color:#fff;">Add Your Business</button>
    </header>
    <main>
        <div id="addFormContainer" class="card hidden" style="margin-bottom:20px;">
            <input id="bizName" placeholder="Business name">
            <input id="bizCategory" placeholder="Category">
            <input id="bizLocation" placeholder="Location">
            <textarea id="bizDescription" placeholder="Description"></textarea>
            <input id="bizPhone" placeholder="Phone (optional)">
            <input id="bizHours" placeholder="Opening hours (optional)">
            <button id="submitBiz" class="btn">Submit</button>
            <p id="formMessage"></p>
        </div>
        <input id="searchInput" placeholder="Search by name, category or location">
        <p id="listMessage"></p>
        <div id="businessGrid" class="grid"></div>
    </main>

    <div id="reviewModal" class="modal hidden">
        <div class="card">
            <h2 id="reviewTitle">Review</h2>
            <div id="ratingStars" class="stars"></div>
            <input id="reviewerName" placeholder="Your name">
            <textarea id="reviewText" placeholder="Your review"></textarea>
            <p id="reviewError" class="error"></p>
            <button id="submitReview" class="btn">Submit Review</button>
            <button id="cancelReview" class="btn btn-ghost">Cancel</button>
        </div>
    </div>
    <script>{COMMON_SCRIPT}{DIRECTORY_SCRIPT}</script>
</body>
</html>"""


def render_admin_page() -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Admin - Local Business Directory</title>
    <style>{SHARED_CSS}</style>
</head>
<body>
    <header>
        <a href="/">Local Business Directory</a>
        <span>Admin</span>
    </header>
    <main>
        <div id="adminKeyPrompt" class="card" style="max-width:420px;margin-bottom:20px;">
            <input id="adminKeyInput" type="password" placeholder="Admin key">
            <button id="submitAdminKey" class="btn">Enter</button>
        </div>
        <p id="adminMessage"></p>
        <div id="businessList" class="grid hidden"></div>
    </main>
    <script>{COMMON_SCRIPT}{ADMIN_SCRIPT}</script>
</body>
</html>"""
